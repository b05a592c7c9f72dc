"""C4 content identifiers, ID trees, file manifests and content-addressed stores."""

__version__ = "0.1.0"

__all__ = [
    "ids",
    "tree",
    "filemode",
    "naturalsort",
    "nillist",
    "manifest",
    "store",
    "folder",
    "ram",
    "mapstore",
    "validating",
    "logger",
    "charset",
]