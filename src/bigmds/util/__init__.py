#!/usr/bin/env python
__all__ = ["misc", "parallel"]

__copyright__ = "Copyright 2024-date, The bigmds Project"
__license__ = "BSD-3"
