"""driver-images: inventory and manage driver machine images on AWS."""

__version__ = "0.1.0"
