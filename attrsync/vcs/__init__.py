from .git_interface import GitWorkingCopy

__all__ = ["GitWorkingCopy"]
