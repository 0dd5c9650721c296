"""Console task list: add, complete, filter, export/import and persist tasks locally."""

__version__ = "0.1.0"
