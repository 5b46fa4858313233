from enum import Enum


class ImageFilter(str, Enum):
    grayscale = "grayscale"
    blur = "blur"


class OutputPrefix(str, Enum):
    resized = "resized"
    cropped = "cropped"
    filtered = "filtered"
    watermarked = "watermarked"
