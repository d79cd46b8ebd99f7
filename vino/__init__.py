"""A visual novel engine: a story instruction reader and a pygame GUI toolkit."""

__version__ = "0.1.0"