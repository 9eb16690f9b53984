"""Bundled data files for pathkit."""
