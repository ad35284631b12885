"""Image Gallery Service Package."""

__version__ = "1.0.0"
__author__ = "Bharat kumar"
__description__ = (
    "Serverless image gallery using AWS Lambda and S3"
)

__all__ = ["handlers", "core"]
