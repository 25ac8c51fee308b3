"""Command line front end for the session package."""
