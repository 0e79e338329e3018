"""skilldocs -- load, index and lint a corpus of agent skill documents."""

__version__ = "0.1.0"
