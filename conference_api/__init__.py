"""Conference management API: content hierarchy and question/answer service."""

__version__ = "0.1.0"
