from .initializer import Initializer, Normal, Uniform

__all__ = [
    Initializer.__name__,
    Normal.__name__,
    Uniform.__name__,
]
