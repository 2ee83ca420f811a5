"""delambda command-line interface."""
