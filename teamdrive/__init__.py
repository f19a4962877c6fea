"""Team Drive: per-team folders and files over MongoDB and MinIO."""

__version__ = "1.0.0"
