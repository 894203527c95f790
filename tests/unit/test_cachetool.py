"""
CacheTool — Facade Tests

Tests proxy registration, function table building and invalidation,
dispatch, and adapter/logger wiring.
"""

import json
import logging

import pytest

from cachetool.errors import CacheToolError, FunctionNotFoundError
from cachetool.observability import NOTICE
from cachetool.tool import CacheTool


class TestProxyRegistration:
    """Test add_proxy / get_proxies."""

    def test_proxies_keep_registration_order(self, cachetool: CacheTool, make_proxy) -> None:
        first = make_proxy("a", ["ping"])
        second = make_proxy("b", ["status"])

        cachetool.add_proxy(first).add_proxy(second)

        assert cachetool.get_proxies() == (first, second)

    def test_duplicates_are_allowed(self, cachetool: CacheTool, make_proxy) -> None:
        proxy = make_proxy("a", ["ping"])

        cachetool.add_proxy(proxy)
        cachetool.add_proxy(proxy)

        assert cachetool.get_proxies() == (proxy, proxy)

    def test_get_proxies_is_read_only(self, cachetool: CacheTool, make_proxy) -> None:
        cachetool.add_proxy(make_proxy("a", ["ping"]))

        proxies = cachetool.get_proxies()

        assert isinstance(proxies, tuple)
        with pytest.raises(AttributeError):
            proxies.append(make_proxy("b", ["status"]))  # type: ignore[attr-defined]
        assert len(cachetool.get_proxies()) == 1

    def test_add_proxy_logs_class_name(self, cachetool: CacheTool, make_proxy, cachetool_logs) -> None:
        cachetool.add_proxy(make_proxy("a", ["ping"]))

        assert "Adding proxy: StubProxy" in cachetool_logs.messages


class TestFunctionTable:
    """Test lazy build, collision handling and invalidation."""

    def test_table_is_union_of_proxy_functions(self, cachetool: CacheTool, make_proxy) -> None:
        cachetool.add_proxy(make_proxy("a", ["ping", "stats"]))
        cachetool.add_proxy(make_proxy("b", ["status"]))
        cachetool.add_proxy(make_proxy("c", []))

        assert set(cachetool.get_functions()) == {"ping", "stats", "status"}

    def test_last_registered_proxy_wins(self, cachetool: CacheTool, make_proxy) -> None:
        proxy_a = make_proxy("a", ["ping"])
        proxy_b = make_proxy("b", ["ping", "status"])
        cachetool.add_proxy(proxy_a).add_proxy(proxy_b)

        assert cachetool.call("ping") == ("b", "ping", ())
        assert cachetool.call("status") == ("b", "status", ())
        assert proxy_a.calls == []

        with pytest.raises(LookupError):
            cachetool.call("missing")

    def test_table_is_built_lazily_once(self, cachetool: CacheTool, make_proxy) -> None:
        proxy = make_proxy("a", ["ping"])
        cachetool.add_proxy(proxy)

        assert proxy.get_functions_calls == 0
        assert proxy.adapter_calls == []

        cachetool.call("ping")
        cachetool.call("ping")
        cachetool.get_functions()

        assert proxy.get_functions_calls == 1
        assert len(proxy.adapter_calls) == 1

    def test_add_proxy_invalidates_built_table(self, cachetool: CacheTool, make_proxy) -> None:
        first = make_proxy("a", ["ping"])
        cachetool.add_proxy(first)
        assert cachetool.call("ping") == ("a", "ping", ())

        cachetool.add_proxy(make_proxy("b", ["ping", "status"]))

        assert cachetool.call("ping") == ("b", "ping", ())
        assert cachetool.call("status") == ("b", "status", ())
        # rebuilt from scratch: the first proxy is asked again
        assert first.get_functions_calls == 2

    def test_reset_functions_forces_rebuild(self, cachetool: CacheTool, make_proxy) -> None:
        proxy = make_proxy("a", ["ping"])
        cachetool.add_proxy(proxy)
        cachetool.call("ping")

        cachetool.reset_functions()
        cachetool.call("ping")

        assert proxy.get_functions_calls == 2

    def test_functions_reported_later_are_not_seen_until_rebuild(self, cachetool: CacheTool, make_proxy) -> None:
        proxy = make_proxy("a", ["ping"])
        cachetool.add_proxy(proxy)
        cachetool.call("ping")

        proxy.functions.append("status")

        with pytest.raises(FunctionNotFoundError):
            cachetool.call("status")

        cachetool.reset_functions()
        assert cachetool.call("status") == ("a", "status", ())

    def test_table_build_logs_proxies_and_functions(self, cachetool: CacheTool, make_proxy, cachetool_logs) -> None:
        cachetool.add_proxy(make_proxy("a", ["ping"]))

        cachetool.get_functions()

        assert "Loading proxy: StubProxy" in cachetool_logs.messages
        assert "Loading function: ping" in cachetool_logs.messages


class TestDispatch:
    """Test call()."""

    def test_arguments_are_passed_through_in_order(self, cachetool: CacheTool, make_proxy) -> None:
        proxy = make_proxy("a", ["store"])
        cachetool.add_proxy(proxy)
        payload = {"nested": [1, 2, 3]}

        result = cachetool.call("store", "key", payload, None, 42)

        assert result == ("a", "store", ("key", payload, None, 42))
        assert proxy.calls == [("store", ("key", payload, None, 42))]
        assert proxy.calls[0][1][1] is payload

    def test_none_result_is_returned(self, cachetool: CacheTool) -> None:
        class NoneProxy:
            def get_functions(self):
                return ["noop"]

            def set_adapter(self, adapter):
                pass

            def noop(self):
                return None

        cachetool.add_proxy(NoneProxy())  # type: ignore[arg-type]

        assert cachetool.call("noop") is None

    def test_unknown_function_raises_lookup_error(self, cachetool: CacheTool, make_proxy) -> None:
        proxy = make_proxy("a", ["ping"])
        cachetool.add_proxy(proxy)

        with pytest.raises(FunctionNotFoundError) as exc_info:
            cachetool.call("missing", 1)

        error = exc_info.value
        assert isinstance(error, LookupError)
        assert isinstance(error, CacheToolError)
        assert error.name == "missing"
        assert "missing" in str(error)
        assert error.to_dict()["details"] == {"function": "missing"}
        assert proxy.calls == []

    def test_unknown_function_without_proxies(self, cachetool: CacheTool) -> None:
        with pytest.raises(LookupError):
            cachetool.call("anything")

    def test_call_is_logged_at_notice_before_lookup(self, cachetool: CacheTool, cachetool_logs) -> None:
        with pytest.raises(FunctionNotFoundError):
            cachetool.call("missing", "key", {"a": 1}, [1, 2])

        records = [record for record in cachetool_logs.records if record.levelno == NOTICE]
        assert len(records) == 1
        assert records[0].getMessage() == 'Executing: missing("key", {"a": 1}, [1, 2])'

    def test_non_json_arguments_are_logged_with_repr(self, cachetool: CacheTool, make_proxy, cachetool_logs) -> None:
        cachetool.add_proxy(make_proxy("a", ["ping"]))
        marker = object()

        cachetool.call("ping", marker)

        notice = [record.getMessage() for record in cachetool_logs.records if record.levelno == NOTICE]
        assert notice == [f"Executing: ping({json.dumps(repr(marker))})"]

    def test_dict_with_non_string_keys_is_dispatched(self, cachetool: CacheTool, make_proxy, cachetool_logs) -> None:
        proxy = make_proxy("a", ["store"])
        cachetool.add_proxy(proxy)
        payload = {(1, 2): "x"}

        assert cachetool.call("store", "key", payload) == ("a", "store", ("key", payload))

        notice = [record.getMessage() for record in cachetool_logs.records if record.levelno == NOTICE]
        assert notice == [f'Executing: store("key", {json.dumps(repr(payload))})']

    def test_cyclic_argument_is_dispatched(self, cachetool: CacheTool, make_proxy, cachetool_logs) -> None:
        proxy = make_proxy("a", ["store"])
        cachetool.add_proxy(proxy)
        cyclic: list = [1]
        cyclic.append(cyclic)

        result = cachetool.call("store", cyclic)

        assert result[2][0] is cyclic
        notice = [record.getMessage() for record in cachetool_logs.records if record.levelno == NOTICE]
        assert notice == ['Executing: store("[1, [...]]")']

    def test_arguments_are_not_rendered_when_notice_is_disabled(self, temp_dir: str, make_proxy) -> None:
        class Counted:
            renders = 0

            def __repr__(self) -> str:
                Counted.renders += 1
                return "Counted()"

        quiet = logging.getLogger("tests.quiet")
        quiet.setLevel(logging.WARNING)
        cachetool = CacheTool(temp_dir=temp_dir, logger=quiet)
        cachetool.add_proxy(make_proxy("a", ["ping"]))

        cachetool.call("ping", Counted())

        assert Counted.renders == 0

    def test_proxy_errors_propagate_unmodified(self, cachetool: CacheTool) -> None:
        failure = RuntimeError("backend down")

        class FailingProxy:
            def get_functions(self):
                return ["explode"]

            def set_adapter(self, adapter):
                pass

            def explode(self):
                raise failure

        cachetool.add_proxy(FailingProxy())  # type: ignore[arg-type]

        with pytest.raises(RuntimeError) as exc_info:
            cachetool.call("explode")

        assert exc_info.value is failure


class TestAdapterWiring:
    """Test set_adapter and lazy adapter injection into proxies."""

    def test_set_adapter_injects_logger_and_temp_dir(self, cachetool: CacheTool, recording_adapter) -> None:
        cachetool.set_adapter(recording_adapter)

        assert cachetool.get_adapter() is recording_adapter
        assert recording_adapter.loggers == [cachetool.get_logger()]
        assert recording_adapter.temp_dirs == [cachetool.get_temp_dir()]
        assert recording_adapter.get_temp_dir() == cachetool.get_temp_dir()

    def test_set_adapter_logs_class_name(self, cachetool: CacheTool, recording_adapter, cachetool_logs) -> None:
        cachetool.set_adapter(recording_adapter)

        assert "Setting adapter: RecordingAdapter" in cachetool_logs.messages

    def test_get_adapter_defaults_to_none(self, cachetool: CacheTool) -> None:
        assert cachetool.get_adapter() is None

    def test_proxy_receives_adapter_once_at_build_time(
        self, cachetool: CacheTool, make_proxy, recording_adapter
    ) -> None:
        events: list[str] = []
        proxy = make_proxy("a", ["ping"])
        original_set_adapter = proxy.set_adapter

        def tracking_set_adapter(adapter):
            events.append("set_adapter")
            original_set_adapter(adapter)

        proxy.set_adapter = tracking_set_adapter

        cachetool.set_adapter(recording_adapter)
        cachetool.add_proxy(proxy)
        assert proxy.adapter_calls == []

        cachetool.call("ping")
        events.append("called")

        assert proxy.adapter_calls == [recording_adapter]
        assert events == ["set_adapter", "called"]

    def test_proxies_receive_none_without_adapter(self, cachetool: CacheTool, make_proxy) -> None:
        proxy = make_proxy("a", ["ping"])
        cachetool.add_proxy(proxy)

        cachetool.call("ping")

        assert proxy.adapter_calls == [None]

    def test_adapter_swap_after_build_keeps_previous_wiring(
        self, cachetool: CacheTool, make_proxy, make_recording_adapter
    ) -> None:
        first = make_recording_adapter()
        second = make_recording_adapter()
        proxy = make_proxy("a", ["ping"])
        cachetool.set_adapter(first)
        cachetool.add_proxy(proxy)
        cachetool.call("ping")

        cachetool.set_adapter(second)
        cachetool.call("ping")

        assert proxy.adapter_calls == [first]

        cachetool.add_proxy(make_proxy("b", ["status"]))
        cachetool.call("ping")

        assert proxy.adapter_calls == [first, second]


class TestLoggerWiring:
    """Test set_logger / get_logger."""

    def test_default_logger_is_library_logger(self, temp_dir: str) -> None:
        cachetool = CacheTool(temp_dir=temp_dir)

        assert cachetool.get_logger() is logging.getLogger("cachetool")

    def test_explicit_logger_is_used(self, temp_dir: str) -> None:
        custom = logging.getLogger("tests.custom")

        cachetool = CacheTool(temp_dir=temp_dir, logger=custom)

        assert cachetool.get_logger() is custom

    def test_set_logger_reinjects_into_adapter(self, cachetool: CacheTool, recording_adapter) -> None:
        cachetool.set_adapter(recording_adapter)
        custom = logging.getLogger("tests.custom")

        cachetool.set_logger(custom)

        assert cachetool.get_logger() is custom
        assert recording_adapter.logger is custom
        assert recording_adapter.loggers[-1] is custom

    def test_set_logger_without_adapter(self, cachetool: CacheTool) -> None:
        custom = logging.getLogger("tests.custom")

        cachetool.set_logger(custom)

        assert cachetool.get_logger() is custom

    def test_set_logger_does_not_touch_proxies(self, cachetool: CacheTool, make_proxy, recording_adapter) -> None:
        proxy = make_proxy("a", ["ping"])
        cachetool.set_adapter(recording_adapter)
        cachetool.add_proxy(proxy)

        cachetool.set_logger(logging.getLogger("tests.custom"))

        assert proxy.adapter_calls == []


class TestFactory:
    """Test CacheTool.factory()."""

    def test_factory_registers_bundled_proxies(self, temp_dir: str) -> None:
        from cachetool.proxy import BytecodeProxy, MemoryCacheProxy, RuntimeProxy

        cachetool = CacheTool.factory(temp_dir=temp_dir)

        assert [type(proxy) for proxy in cachetool.get_proxies()] == [MemoryCacheProxy, RuntimeProxy, BytecodeProxy]
        assert cachetool.get_adapter() is None

    def test_factory_sets_adapter(self, temp_dir: str, recording_adapter) -> None:
        cachetool = CacheTool.factory(recording_adapter, temp_dir=temp_dir)

        assert cachetool.get_adapter() is recording_adapter
        assert recording_adapter.temp_dirs == [temp_dir]

    def test_factory_functions_are_reachable(self, temp_dir: str) -> None:
        cachetool = CacheTool.factory(temp_dir=temp_dir)

        functions = cachetool.get_functions()

        assert functions["python_version"].__class__.__name__ == "RuntimeProxy"
        assert functions["lru_cache_info"].__class__.__name__ == "MemoryCacheProxy"
        assert functions["bytecode_get_status"].__class__.__name__ == "BytecodeProxy"
