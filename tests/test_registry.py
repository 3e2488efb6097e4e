"""Tests for reroute.registry — the recording ServeMux."""

import threading
from dataclasses import dataclass, make_dataclass

import pytest

from reroute.config import CheckConfig, MuxConfig
from reroute.errors import (
    ConfigurationError,
    InvalidRecordError,
    IrreversibleRoutes,
    NonExistentRoutes,
)
from reroute.http.request import Request
from reroute.mux import HostMux
from reroute.records import fill_routes, route
from reroute.registry import ServeMux


def _handler(request: Request) -> str:
    return "ok"


def _mux(*patterns: str) -> ServeMux:
    mux = ServeMux()
    for pattern in patterns:
        mux.handle(pattern, _handler)
    return mux


def _record(**patterns: str) -> object:
    cls = make_dataclass("Routes", [(name, str) for name in patterns])
    return cls(**patterns)


@dataclass
class Empty:
    pass


class TestRegistration:
    def test_records_patterns(self) -> None:
        mux = _mux("/ignore/", "/", "/hello/")
        assert mux.patterns == ["/", "/hello/", "/ignore/"]

    def test_forwards_to_host_mux(self) -> None:
        mux = _mux("/hello/")
        handler, pattern = mux.handler(Request.build("/hello/x"))
        assert handler is _handler
        assert pattern == "/hello/"

    def test_served_patterns_are_all_recorded(self) -> None:
        mux = ServeMux()
        mux.handle("/", _handler)
        assert sorted(mux._mux.patterns) == mux.patterns

    def test_rejects_foreign_host_mux(self) -> None:
        host = HostMux()
        host.handle("/admin/", _handler)
        with pytest.raises(TypeError):
            ServeMux(mux=host)  # type: ignore[call-arg]

    def test_route_decorator(self) -> None:
        mux = ServeMux()

        @mux.route("/hello/")
        def hello(request: Request) -> str:
            return "hi"

        assert mux.patterns == ["/hello/"]
        handler, pattern = mux.handler(Request.build("/hello/x"))
        assert handler is hello
        assert pattern == "/hello/"

    def test_handle_func(self) -> None:
        mux = ServeMux()
        mux.handle_func("/a", _handler)
        assert mux.patterns == ["/a"]

    def test_rejected_pattern_propagates_and_is_not_recorded(self) -> None:
        mux = _mux("/a")
        with pytest.raises(ConfigurationError):
            mux.handle("/a", _handler)
        with pytest.raises(ConfigurationError):
            mux.handle("", _handler)
        assert mux.patterns == ["/a"]

    def test_patterns_is_a_snapshot(self) -> None:
        mux = _mux("/a")
        snapshot = mux.patterns
        snapshot.append("/b")
        assert mux.patterns == ["/a"]

    def test_concurrent_registration(self) -> None:
        mux = ServeMux()
        barrier = threading.Barrier(8)

        def register(worker: int) -> None:
            barrier.wait()
            for i in range(50):
                mux.handle(f"/w{worker}/r{i}/", _handler)

        threads = [threading.Thread(target=register, args=(w,)) for w in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        expected = sorted(f"/w{w}/r{i}/" for w in range(8) for i in range(50))
        assert mux.patterns == expected
        record = _record(**{f"r{n}": p for n, p in enumerate(expected)})
        assert mux.check_reverse(record) is None

    def test_check_during_registration_sees_consistent_snapshot(self) -> None:
        base = ["/", "/about", "/users/"]
        mux = _mux(*base)
        record = _record(**{f"b{n}": p for n, p in enumerate(base)})
        workers = 4
        barrier = threading.Barrier(workers + 1)
        done = threading.Event()
        results: list[object] = []

        def register(worker: int) -> None:
            barrier.wait()
            for i in range(100):
                mux.handle(f"/w{worker}/r{i}/", _handler)

        def check() -> None:
            barrier.wait()
            while not done.is_set():
                results.append(mux.check_reverse(record))
            results.append(mux.check_reverse(record))

        threads = [threading.Thread(target=register, args=(w,)) for w in range(workers)]
        checker = threading.Thread(target=check)
        checker.start()
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        done.set()
        checker.join()

        final = set(mux.patterns)
        assert len(final) == len(base) + workers * 100
        assert results
        for err in results:
            if err is None:
                continue
            assert not isinstance(err, NonExistentRoutes)
            assert isinstance(err, IrreversibleRoutes)
            assert list(err.routes) == sorted(err.routes)
            assert set(err.routes) <= final
            assert not set(err.routes) & set(base)
        last = results[-1]
        assert isinstance(last, IrreversibleRoutes)
        assert set(last.routes) == final - set(base)


class TestDelegation:
    def test_param(self) -> None:
        mux = _mux("/hello/")
        assert mux.param(Request.build("/hello/world")) == "world"

    def test_param_for_fixed_route(self) -> None:
        mux = _mux("/hello")
        assert mux.param(Request.build("/hello")) == ""

    def test_config_passed_to_host_mux(self) -> None:
        config = MuxConfig(redirect_trailing_slash=False)
        mux = ServeMux(config)
        assert mux.config is config
        mux.handle("/tree/", _handler)
        _, pattern = mux.handler(Request.build("/tree"))
        assert pattern == ""


class TestCheckReverse:
    def test_irreversible_routes(self) -> None:
        mux = _mux("/", "/hello/", "/ignore/")
        err = mux.check_reverse(Empty())
        assert isinstance(err, IrreversibleRoutes)
        assert err.routes == ("/", "/hello/", "/ignore/")

    def test_nonexistent_routes(self) -> None:
        mux = _mux("/", "/hello/", "/ignore/")
        err = mux.check_reverse(_record(root="/", hello="/hello/", ignore="/other/"))
        assert isinstance(err, NonExistentRoutes)
        assert err.routes == ("/other/",)

    def test_success(self) -> None:
        mux = _mux("/ignore/", "/", "/hello/")
        assert mux.check_reverse(_record(hello="/hello/", root="/", ignore="/ignore/")) is None

    def test_invalid_record(self) -> None:
        mux = _mux("/")
        assert isinstance(mux.check_reverse(1), InvalidRecordError)

    def test_does_not_mutate_registry(self) -> None:
        mux = ServeMux()
        for pattern in ("/b", "/a", "/c"):
            mux.handle(pattern, _handler)
        mux.check_reverse(Empty())
        assert mux._patterns == ["/b", "/a", "/c"]

    def test_with_filled_record(self) -> None:
        @dataclass
        class Routes:
            sessions: str = route("/v1/sessions/")
            users: str = route("/v1/users/")

        routes = fill_routes(Routes())
        mux = _mux(routes.sessions, routes.users)
        assert mux.check_reverse(routes) is None


class TestCheck:
    def test_success_prints_summary(self, capsys: pytest.CaptureFixture[str]) -> None:
        mux = _mux("/")
        mux.check(_record(root="/"))
        assert "No issues found." in capsys.readouterr().out

    def test_irreversible_exits(self, capsys: pytest.CaptureFixture[str]) -> None:
        mux = _mux("/", "/metrics")
        with pytest.raises(SystemExit) as exc_info:
            mux.check(_record(root="/"))
        assert exc_info.value.code == 1
        assert "irreversible routes: ['/metrics']" in capsys.readouterr().out

    def test_tolerated_routes_pass(self, capsys: pytest.CaptureFixture[str]) -> None:
        mux = _mux("/", "/metrics")
        mux.check(_record(root="/"), CheckConfig(tolerate=frozenset({"/metrics"})))
        assert "No issues found." in capsys.readouterr().out

    def test_lenient_only_warns(self, capsys: pytest.CaptureFixture[str]) -> None:
        mux = _mux("/", "/metrics")
        mux.check(_record(root="/"), CheckConfig(strict=False))
        out = capsys.readouterr().out
        assert "warning: irreversible routes: ['/metrics']" in out

    def test_nonexistent_always_fails(self, capsys: pytest.CaptureFixture[str]) -> None:
        mux = _mux("/")
        with pytest.raises(SystemExit):
            mux.check(_record(root="/", gone="/gone/"), CheckConfig(strict=False))
        assert "non-existent routes: ['/gone/']" in capsys.readouterr().out

    def test_invalid_record_fails(self, capsys: pytest.CaptureFixture[str]) -> None:
        mux = _mux("/")
        with pytest.raises(SystemExit):
            mux.check(None)
        assert "error: null record" in capsys.readouterr().out

    def test_logs_nonexistent(self, caplog: pytest.LogCaptureFixture) -> None:
        mux = _mux("/")
        with caplog.at_level("ERROR", logger="reroute.check"), pytest.raises(SystemExit):
            mux.check(_record(root="/", gone="/gone/"))
        assert "non-existent routes" in caplog.text
