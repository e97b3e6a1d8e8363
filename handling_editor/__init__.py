"""Editing session, settings and command line tools built on :mod:`handling_core`."""
