"""Packaged reference crop catalog and catalog JSON loading."""
