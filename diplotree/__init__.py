"""A hierarchical key/value database stored in an XML file."""

__version__ = "0.1.0"
__all__ = ["errors", "node_id", "values", "node", "xmltreedb"]