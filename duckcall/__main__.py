# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: Sławomir Liszniański; created: 2026-10-15
"""
CLI entrypoint for `python -m duckcall`.
"""

from .cli import main

if __name__ == "__main__":
	import sys
	sys.exit(main())
