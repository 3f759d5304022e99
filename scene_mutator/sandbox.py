#
# PROJECT: wireframe-scene-mutator
# MODULE: scene_mutator/sandbox.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import ast
import logging
import time
from typing import Mapping

from .errors import EmptyScript, ExecutionError, ScriptRejected

logger = logging.getLogger(__name__)

BINDING_NAMES = ("scene", "kit", "camera", "renderer")

# Reserved user_data key holding an object's per-frame callback.
UPDATE_KEY = "update"

_REJECTED_NODES = {
    ast.Import: "import statements are not allowed",
    ast.ImportFrom: "import statements are not allowed",
    ast.Global: "global declarations are not allowed",
    ast.Nonlocal: "nonlocal declarations are not allowed",
    ast.ClassDef: "class definitions are not allowed",
    ast.AsyncFunctionDef: "async code is not allowed",
    ast.AsyncFor: "async code is not allowed",
    ast.AsyncWith: "async code is not allowed",
    ast.Await: "async code is not allowed",
}

BLOCKED_NAMES = frozenset({
    "open", "eval", "exec", "compile", "input", "breakpoint", "help",
    "globals", "locals", "vars", "dir", "getattr", "setattr", "delattr",
    "type", "object", "super", "memoryview", "exit", "quit",
})

# Attributes that reach interpreter internals (frames, code objects) or
# perform attribute lookups from strings.
BLOCKED_ATTRIBUTES = frozenset({
    "format", "format_map", "mro",
    "gi_frame", "gi_code", "gi_yieldfrom", "cr_frame", "cr_code", "ag_frame", "ag_code",
    "f_back", "f_globals", "f_locals", "f_builtins", "f_code", "tb_frame", "tb_next",
})


# Parser and compiler failures other than SyntaxError (null bytes, deep nesting).
_COMPILER_FAULTS = (ValueError, MemoryError, RecursionError)


def _script_print(*args, sep=" ", end=""):
    logger.info("script: %s", sep.join(str(a) for a in args))


SAFE_BUILTINS = {
    "abs": abs, "all": all, "any": any, "bool": bool, "callable": callable,
    "dict": dict, "divmod": divmod, "enumerate": enumerate, "filter": filter,
    "float": float, "int": int, "isinstance": isinstance, "len": len,
    "list": list, "map": map, "max": max, "min": min, "pow": pow,
    "range": range, "reversed": reversed, "round": round, "set": set,
    "sorted": sorted, "str": str, "sum": sum, "tuple": tuple, "zip": zip,
    "print": _script_print,
    "Exception": Exception, "ValueError": ValueError, "TypeError": TypeError,
    "KeyError": KeyError, "IndexError": IndexError,
    "ZeroDivisionError": ZeroDivisionError,
}


def _root_name(node):
    while isinstance(node, (ast.Attribute, ast.Subscript)):
        node = node.value
    return node.id if isinstance(node, ast.Name) else None


class _Validator(ast.NodeVisitor):
    def __init__(self):
        self.problem = None

    def _reject(self, node, reason):
        if self.problem is None:
            self.problem = (reason, getattr(node, 'lineno', None))

    def generic_visit(self, node):
        reason = _REJECTED_NODES.get(type(node))
        if reason:
            self._reject(node, reason)
            return
        super().generic_visit(node)

    def visit_Name(self, node):
        if node.id.startswith('_'):
            self._reject(node, f"name {node.id!r} is not allowed")
        elif node.id in BLOCKED_NAMES:
            self._reject(node, f"{node.id}() is not available")

    def visit_Attribute(self, node):
        if node.attr.startswith('_') or node.attr in BLOCKED_ATTRIBUTES:
            self._reject(node, f"attribute {node.attr!r} is not allowed")
            return
        if isinstance(node.ctx, (ast.Store, ast.Del)) and _root_name(node) == "kit":
            self._reject(node, "the kit namespace is read-only")
            return
        self.generic_visit(node)

    def _check_args(self, node):
        args = node.args
        for arg in args.posonlyargs + args.args + args.kwonlyargs:
            if arg.arg.startswith('_'):
                self._reject(node, f"name {arg.arg!r} is not allowed")
        for arg in (args.vararg, args.kwarg):
            if arg is not None and arg.arg.startswith('_'):
                self._reject(node, f"name {arg.arg!r} is not allowed")

    def visit_FunctionDef(self, node):
        if node.name.startswith('_'):
            self._reject(node, f"name {node.name!r} is not allowed")
        self._check_args(node)
        self.generic_visit(node)

    def visit_Lambda(self, node):
        self._check_args(node)
        self.generic_visit(node)


class ScriptSandbox:
    """
    Run scene scripts against the four bound capabilities.

    The script is parsed and checked against an allow-list before it is
    compiled, then executed with a fresh globals dict that holds only the
    bindings and a small set of pure builtins. No transaction: if the
    script raises halfway, whatever it already changed stays changed.
    """

    def __init__(self, filename: str = "<scene-script>"):
        self.filename = filename

    def validate(self, script: str) -> ast.Module:
        """Parse and check a script. Raises EmptyScript, ScriptRejected or ExecutionError."""
        if not isinstance(script, str) or not script.strip():
            raise EmptyScript()
        try:
            tree = ast.parse(script, filename=self.filename, mode="exec")
        except SyntaxError as e:
            raise ExecutionError(f"SyntaxError: {e.msg} (line {e.lineno})",
                                 cause=e, line=e.lineno) from e
        except _COMPILER_FAULTS as e:
            raise ExecutionError(f"{type(e).__name__}: script could not be parsed", cause=e) from e

        validator = _Validator()
        try:
            validator.visit(tree)
        except RecursionError as e:
            raise ExecutionError("RecursionError: script is nested too deeply", cause=e) from e
        if validator.problem is not None:
            reason, line = validator.problem
            where = f" (line {line})" if line else ""
            raise ScriptRejected(f"Script rejected: {reason}{where}", line=line)
        return tree

    def execute(self, script: str, bindings: Mapping[str, object]) -> None:
        if set(bindings) != set(BINDING_NAMES):
            raise ValueError(f"bindings must be exactly {', '.join(BINDING_NAMES)}; "
                             f"got {', '.join(sorted(bindings))}")

        tree = self.validate(script)
        try:
            code = compile(tree, self.filename, "exec", dont_inherit=True)
        except (SyntaxError,) + _COMPILER_FAULTS as e:
            raise ExecutionError(f"{type(e).__name__}: script could not be compiled", cause=e) from e

        namespace = {"__builtins__": dict(SAFE_BUILTINS)}
        namespace.update((name, bindings[name]) for name in BINDING_NAMES)

        start_ts = time.perf_counter()
        try:
            exec(code, namespace)
        except Exception as e:
            line = None
            tb = e.__traceback__
            while tb:
                if tb.tb_frame.f_code.co_filename == self.filename:
                    line = tb.tb_lineno
                tb = tb.tb_next
            where = f" at line {line}" if line else ""
            logger.warning("Script execution failed%s: %s: %s", where, type(e).__name__, e)
            raise ExecutionError(f"{type(e).__name__}{where}: {e}", cause=e, line=line) from e
        finally:
            dur = time.perf_counter() - start_ts
            logger.debug("Script ran for %.3fs", dur)
