from .matrix import Matrix2

__all__ = ["Matrix2"]
