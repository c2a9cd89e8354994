"""docnorm - normalize documents into templates and grade the results."""

__version__ = "0.1.0"
