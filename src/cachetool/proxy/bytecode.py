"""
CacheTool — Bytecode Proxy

Control of the interpreter's compiled bytecode cache (``__pycache__``).

All paths are resolved inside the target runtime, so relative paths are
relative to that runtime's working directory.
"""

from typing import Any

from ..code import Code
from .interface import AbstractProxy


class BytecodeProxy(AbstractProxy):
    """Inspects, compiles and invalidates cached bytecode."""

    def get_functions(self) -> list[str]:
        return [
            "bytecode_compile_file",
            "bytecode_get_configuration",
            "bytecode_get_status",
            "bytecode_invalidate",
            "bytecode_invalidate_caches",
            "bytecode_is_script_cached",
            "bytecode_reset",
        ]

    def bytecode_get_configuration(self) -> dict[str, Any]:
        """Return the bytecode settings of the runtime."""
        code = Code()
        code.add_statements(
            [
                "import importlib.util",
                "import platform",
                "import sys",
            ]
        )
        code.add_statement(
            """
            return {
                "python_version": platform.python_version(),
                "cache_tag": sys.implementation.cache_tag,
                "magic_number": importlib.util.MAGIC_NUMBER.hex(),
                "dont_write_bytecode": sys.dont_write_bytecode,
                "pycache_prefix": sys.pycache_prefix,
                "optimize": sys.flags.optimize,
            }
            """
        )

        return self._run(code)

    def bytecode_get_status(self, path: str) -> dict[str, Any]:
        """
        Return the cache state of every Python source below ``path``.

        Each script entry reports its cached file, size, modification time
        and whether the cached copy is older than the source.
        """
        code = Code()
        code.add_statements(["import importlib.util", "import os", "import sys"])
        code.add_statement(f"root = os.path.abspath({Code.literal(path)})")
        code.add_statement(
            """
            scripts = []
            cached_bytes = 0
            for dirpath, dirnames, filenames in os.walk(root):
                dirnames[:] = [d for d in dirnames if d != "__pycache__"]
                for filename in sorted(filenames):
                    if not filename.endswith(".py"):
                        continue
                    source = os.path.join(dirpath, filename)
                    cached = importlib.util.cache_from_source(source)
                    entry = {"script": source, "cached": None, "size": 0, "mtime": None, "stale": False}
                    if os.path.exists(cached):
                        stat = os.stat(cached)
                        entry.update(
                            cached=cached,
                            size=stat.st_size,
                            mtime=stat.st_mtime,
                            stale=os.stat(source).st_mtime > stat.st_mtime,
                        )
                        cached_bytes += stat.st_size
                    scripts.append(entry)
            return {
                "root": root,
                "cache_tag": sys.implementation.cache_tag,
                "num_scripts": len(scripts),
                "num_cached_scripts": sum(1 for entry in scripts if entry["cached"]),
                "cached_bytes": cached_bytes,
                "scripts": scripts,
            }
            """
        )

        return self._run(code)

    def bytecode_compile_file(self, path: str) -> str:
        """Compile a source file and return the path of the cached bytecode."""
        code = Code()
        code.add_statement("import py_compile")
        code.add_statement(f"return py_compile.compile({Code.literal(path)}, doraise=True)")

        return self._run(code)

    def bytecode_is_script_cached(self, path: str) -> bool:
        """Return True if cached bytecode exists for the source file."""
        code = Code()
        code.add_statements(["import importlib.util", "import os"])
        code.add_statement(f"return os.path.exists(importlib.util.cache_from_source(os.path.abspath({Code.literal(path)})))")

        return self._run(code)

    def bytecode_invalidate(self, path: str, force: bool = False) -> bool:
        """
        Remove the cached bytecode of a source file.

        Without ``force`` the cache is only removed when the source is newer.
        Returns True if a cached file was removed.
        """
        code = Code()
        code.add_statements(["import importlib.util", "import os"])
        code.add_statement(f"source = os.path.abspath({Code.literal(path)})")
        code.add_statement(f"force = {Code.literal(bool(force))}")
        code.add_statement(
            """
            cached = importlib.util.cache_from_source(source)
            if not os.path.exists(cached):
                return False
            if not force and os.path.exists(source) and os.stat(source).st_mtime <= os.stat(cached).st_mtime:
                return False
            os.remove(cached)
            return True
            """
        )

        return self._run(code)

    def bytecode_reset(self, path: str) -> int:
        """Remove every cached bytecode file below ``path`` for this runtime. Returns the count."""
        code = Code()
        code.add_statements(["import os", "import sys"])
        code.add_statement(f"root = os.path.abspath({Code.literal(path)})")
        code.add_statement(
            """
            tag = sys.implementation.cache_tag
            removed = 0
            for dirpath, dirnames, filenames in os.walk(root):
                if os.path.basename(dirpath) != "__pycache__":
                    continue
                for filename in filenames:
                    if filename.endswith(".pyc") and f".{tag}." in filename:
                        os.remove(os.path.join(dirpath, filename))
                        removed += 1
            return removed
            """
        )

        return self._run(code)

    def bytecode_invalidate_caches(self) -> bool:
        """Invalidate the import system's finder caches."""
        code = Code()
        code.add_statement("import importlib")
        code.add_statement("importlib.invalidate_caches()")
        code.add_statement("return True")

        return self._run(code)
