__all__ = ["test_misc", "test_parallel"]
