"""Patch Operations — JSON-Patch-shaped edits applied to a flat, fixed-field target.

Invariants:
    - Only top-level paths naming an allowed field ("/name", "/description") are accepted
    - The input target is never mutated; a patched copy is returned
    - Any failure raises PatchValidationError before the caller can commit anything
    - "remove" resets a field to None (fields are properties, not optional keys)

Design Decisions:
    - Small fixed-field engine instead of a generic JSON Patch library: targets have
      two fields, and re-validation of the result happens in the service layer
    - Operations arrive as plain dicts (keys op/path/value/from); a missing "value"
      key is distinct from an explicit null
    - Path segments match case-insensitively ("/Name" == "/name")
"""

from typing import Any, Iterable, NoReturn

from cityinfo.core.errors import ErrorContext, PatchValidationError

SUPPORTED_OPERATIONS = ("add", "replace", "remove", "copy", "move", "test")


def apply_patch(
    target: dict[str, Any],
    operations: Iterable[dict[str, Any]],
    allowed_fields: Iterable[str],
    context: ErrorContext | None = None,
) -> dict[str, Any]:
    """Apply operations in order to a copy of target. Pure, raises on first failure.

    context is attached to the raised PatchValidationError.
    """
    fields = tuple(allowed_fields)
    patched = dict(target)
    for index, operation in enumerate(operations):
        try:
            _apply_operation(patched, operation, fields, index)
        except PatchValidationError as e:
            e.context = context or e.context
            raise
    return patched


def _apply_operation(
    patched: dict[str, Any], operation: dict[str, Any], fields: tuple[str, ...], index: int,
) -> None:
    op = operation.get("op")
    path = operation.get("path", "")
    if op not in SUPPORTED_OPERATIONS:
        _fail(index, path, f"Unsupported patch operation '{op}'")
    field = _resolve_field(path, fields, index)

    if op in ("add", "replace"):
        patched[field] = _require_value(operation, index, path)
    elif op == "remove":
        patched[field] = None
    elif op in ("copy", "move"):
        source = _resolve_field(operation.get("from", ""), fields, index)
        patched[field] = patched.get(source)
        if op == "move" and source != field:
            patched[source] = None
    elif op == "test":
        expected = _require_value(operation, index, path)
        if patched.get(field) != expected:
            _fail(index, path, f"Test failed: current value does not equal {expected!r}")


def _resolve_field(path: Any, fields: tuple[str, ...], index: int) -> str:
    """Map a JSON pointer like '/name' onto an allowed field name."""
    if not isinstance(path, str) or not path.startswith("/"):
        _fail(index, str(path), "Path must be a JSON pointer such as '/name'")
    segment = path[1:].replace("~1", "/").replace("~0", "~").lower()
    if segment not in fields:
        _fail(index, path, f"The target location '{path}' was not found")
    return segment


def _require_value(operation: dict[str, Any], index: int, path: str) -> Any:
    if "value" not in operation:
        _fail(index, path, "Operation requires a 'value'")
    return operation["value"]


def _fail(index: int, path: str, message: str) -> NoReturn:
    raise PatchValidationError(
        "Patch document could not be applied",
        details=[{
            "field": f"operations.{index}{path.replace('/', '.') if path else ''}",
            "message": message,
            "type": "patch_error",
        }],
    )
