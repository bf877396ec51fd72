"""Layer document model, PNG export, HTML layer reports, layer tree models and GNU-style option scanning."""

__version__ = "0.1.0"

__all__ = [
    "argscan",
    "dragdrop",
    "html_report",
    "layer_listing",
    "layer_tree",
    "longmatch",
    "longopts",
    "model",
    "naming",
    "permute",
]