"""JoyJoy Locums shift and compliance calculation service"""

__version__ = "1.0.0"
