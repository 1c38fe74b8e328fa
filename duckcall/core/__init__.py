"""
duckcall.core: host type model and failures shared by the table and resolver.

Modules:
  - types_core: TypeDesc, primitives, boxed mapping, HostArray, assignability
  - type_names: lark-based parser for type-name strings
  - errors: MethodNotFound / AccessDenied / TypeNameError
"""

__all__ = [
    "types_core",
    "type_names",
    "errors",
]
