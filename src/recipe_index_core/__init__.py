"""Build a flat recipe index from a folder of IIIF Presentation 3 manifests."""

__version__ = "1.0.0"
