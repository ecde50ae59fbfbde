"""collab-sync: trigger handlers that keep denormalized project/contributor state consistent."""

__version__ = "1.0.0"
