"""LiveKit Test Bench - operator backend for exercising a LiveKit voice agent stack"""

__version__ = "1.0.0"
