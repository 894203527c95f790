"""
CacheTool — Memory Cache Proxy

Statistics and control for the in-memory caches of a Python runtime:
``functools.lru_cache`` wrappers, the ``re`` pattern cache, ``linecache``,
the path importer cache and the module cache.
"""

from typing import Any

from ..code import Code
from .interface import AbstractProxy

# Collects every lru_cache wrapper reachable by the garbage collector whose
# qualified name matches `pattern` (all of them when pattern is None).
_FIND_LRU_CACHES = """
import functools
import gc
import re

wrapper_type = getattr(functools, "_lru_cache_wrapper", None)
matcher = re.compile(pattern) if pattern else None
found = []
if wrapper_type is not None:
    for obj in gc.get_objects():
        if not isinstance(obj, wrapper_type):
            continue
        name = f"{getattr(obj, '__module__', None) or '?'}.{getattr(obj, '__qualname__', None) or repr(obj)}"
        if matcher is not None and not matcher.search(name):
            continue
        found.append((name, obj))
found.sort(key=lambda item: item[0])
"""


class MemoryCacheProxy(AbstractProxy):
    """Inspects and clears in-process memory caches."""

    def get_functions(self) -> list[str]:
        return [
            "importer_cache_clear",
            "importer_cache_info",
            "linecache_clear",
            "lru_cache_clear",
            "lru_cache_info",
            "module_cache_info",
            "regex_cache_purge",
        ]

    def lru_cache_info(self, pattern: str | None = None) -> dict[str, Any]:
        """
        Return hit/miss statistics of ``lru_cache`` wrapped functions.

        Args:
            pattern: Regular expression matched against ``module.qualname``
        """
        code = Code()
        code.add_statement(f"pattern = {Code.literal(pattern)}")
        code.add_statement(_FIND_LRU_CACHES)
        code.add_statement(
            """
            caches = []
            for name, obj in found:
                info = obj.cache_info()
                caches.append(
                    {
                        "name": name,
                        "hits": info.hits,
                        "misses": info.misses,
                        "maxsize": info.maxsize,
                        "currsize": info.currsize,
                    }
                )
            return {
                "num_caches": len(caches),
                "hits": sum(cache["hits"] for cache in caches),
                "misses": sum(cache["misses"] for cache in caches),
                "num_entries": sum(cache["currsize"] for cache in caches),
                "caches": caches,
            }
            """
        )

        return self._run(code)

    def lru_cache_clear(self, pattern: str | None = None) -> int:
        """Clear matching ``lru_cache`` wrappers. Returns the number cleared."""
        code = Code()
        code.add_statement(f"pattern = {Code.literal(pattern)}")
        code.add_statement(_FIND_LRU_CACHES)
        code.add_statement(
            """
            for name, obj in found:
                obj.cache_clear()
            return len(found)
            """
        )

        return self._run(code)

    def regex_cache_purge(self) -> bool:
        """Clear the compiled regular expression cache."""
        code = Code()
        code.add_statement("import re")
        code.add_statement("re.purge()")
        code.add_statement("return True")

        return self._run(code)

    def linecache_clear(self) -> int:
        """Clear the source line cache. Returns the number of files dropped."""
        code = Code()
        code.add_statement("import linecache")
        code.add_statement("count = len(linecache.cache)")
        code.add_statement("linecache.clearcache()")
        code.add_statement("return count")

        return self._run(code)

    def importer_cache_info(self) -> dict[str, Any]:
        """Return the path importer cache as ``{path: finder class}``."""
        code = Code()
        code.add_statement("import sys")
        code.add_statement(
            """
            entries = {
                str(path): (type(finder).__name__ if finder is not None else None)
                for path, finder in sys.path_importer_cache.items()
            }
            return {"num_entries": len(entries), "entries": entries}
            """
        )

        return self._run(code)

    def importer_cache_clear(self) -> int:
        """Clear the path importer cache. Returns the number of entries dropped."""
        code = Code()
        code.add_statements(["import importlib", "import sys"])
        code.add_statement("count = len(sys.path_importer_cache)")
        code.add_statement("sys.path_importer_cache.clear()")
        code.add_statement("importlib.invalidate_caches()")
        code.add_statement("return count")

        return self._run(code)

    def module_cache_info(self) -> dict[str, Any]:
        """Return the names of the imported modules."""
        code = Code()
        code.add_statement("import sys")
        code.add_statement(
            """
            modules = sorted(sys.modules)
            return {
                "num_modules": len(modules),
                "num_builtin_modules": len(sys.builtin_module_names),
                "modules": modules,
            }
            """
        )

        return self._run(code)
