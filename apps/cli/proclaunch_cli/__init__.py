"""proclaunch command line interface."""
