"""End-to-end pipelines mixing factories, combinators and collectors."""

import asyncio
import json

import pytest

from scenario import (
    UNSET,
    Failure,
    FailureValueError,
    Option,
    Result,
    Success,
    collect_results,
    partition_results,
    raise_error,
)


def parse_port(raw: str | None) -> Result[int, str]:
    return (
        Result.from_nullish(raw, "PORT_MISSING")
        .map(str.strip)
        .validate(str.isdigit, "PORT_NOT_NUMERIC")
        .map(int)
        .validate(lambda port: 0 < port < 65536, "PORT_OUT_OF_RANGE")
    )


class TestConfigPipeline:
    """Parsing configuration values with Option and Result."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (" 8080 ", Success(8080)),
            (None, Failure("PORT_MISSING")),
            ("http", Failure("PORT_NOT_NUMERIC")),
            ("70000", Failure("PORT_OUT_OF_RANGE")),
        ],
    )
    def test_parse_port(self, raw, expected):
        assert parse_port(raw) == expected

    def test_optional_setting_with_default(self):
        env = {"WORKERS": "0"}
        workers = Option.from_value(env.get("WORKERS")).map(int).value_or(4)
        threads = Option.from_value(env.get("THREADS")).map(int).value_or(4)
        assert workers == 0
        assert threads == 4

    def test_json_document_lookup(self):
        document = '{"user": {"name": "ada", "email": null}}'
        parsed = Option.from_fallible(lambda: json.loads(document))
        name = parsed.map(lambda d: d["user"]).map(lambda u: u.get("name"))
        email = parsed.map(lambda d: d["user"]).map(lambda u: u.get("email"))
        assert name.value_or("anonymous") == "ada"
        assert email.is_absent()
        assert Option.from_fallible(lambda: json.loads("{")).is_absent()


class TestCollectors:
    """collect_results / partition_results over parsed batches."""

    def test_collect_all_success(self):
        assert collect_results(parse_port(p) for p in ["80", "443"]) == Success([80, 443])

    def test_collect_stops_at_first_failure(self):
        seen = []

        def ports():
            for raw in ["80", "x", None]:
                seen.append(raw)
                yield parse_port(raw)

        assert collect_results(ports()) == Failure("PORT_NOT_NUMERIC")
        assert seen == ["80", "x"]

    def test_collect_empty(self):
        assert collect_results([]) == Success([])

    def test_partition(self):
        values, failures = partition_results(parse_port(p) for p in ["80", "x", None, "22"])
        assert values == [80, 22]
        assert failures == ["PORT_NOT_NUMERIC", "PORT_MISSING"]

    def test_partition_keeps_one_entry_per_failure(self):
        """Failures are listed individually, never merged into one error."""
        batch = [Failure("E"), Success(1), Failure("E"), Failure(["F", "G"])]
        values, failures = partition_results(batch)
        assert values == [1]
        assert failures == ["E", "E", ["F", "G"]]

    def test_partition_copies_payloads(self):
        payload = {"rows": [1]}
        values, _ = partition_results([Success(payload)])
        values[0]["rows"].append(2)
        assert payload == {"rows": [1]}


class TestSignalFlow:
    """Turning absence/failure into exceptions at the edge."""

    def test_option_to_exception(self):
        users = {"ada": {"id": 1}}
        with pytest.raises(KeyError, match="bob"):
            Option.from_value(users.get("bob")).value_or_signal_error(raise_error(KeyError("bob")))

    def test_result_unwrap_at_edge(self):
        with pytest.raises(FailureValueError) as exc_info:
            parse_port("x").unwrap()
        assert exc_info.value.failure_value == "PORT_NOT_NUMERIC"


class TestProperties:
    """Behavioural properties that must hold across the API."""

    @pytest.mark.parametrize("value", [1, "a", 0, "", False, [], {"k": 1}, (1,)])
    def test_present_round_trip(self, value):
        option = Option.from_value(value)
        assert option.is_present()
        assert option.value_or(object()) == value

    @pytest.mark.parametrize("sentinel", [None, UNSET])
    def test_absent_sentinels(self, sentinel):
        assert Option.from_value(sentinel).is_absent()

    @pytest.mark.parametrize("x", [0, 1, -3, 10])
    def test_option_map_law(self, x):
        f = lambda v: v * 3 + 1
        assert Option.some(x).map(f).value_or(None) == f(x)

    @pytest.mark.parametrize("x", [0, "s", [1]])
    def test_result_round_trip(self, x):
        f = lambda v: (v, "mapped")
        g = lambda e: pytest.fail("map_failure must not run on Success")
        assert Result.success(x).map(f).map_failure(g).value() == f(x)

    @pytest.mark.parametrize("e", ["E", 0, None])
    def test_failure_recover(self, e):
        f = lambda err: f"recovered:{err}"
        recovered = Result.failure(e).recover(f)
        assert recovered.is_success()
        assert recovered.value_or("d") == f(e)


class TestAsyncPipeline:
    """map_async chained with synchronous combinators."""

    @pytest.mark.asyncio
    async def test_concurrent_lookups(self):
        prices = {"apple": 3, "pear": 0}

        async def price_of(name):
            await asyncio.sleep(0)
            return Option.from_value(prices.get(name))

        options = await asyncio.gather(
            *(Option.from_value(name).map_async(price_of) for name in ["apple", "pear", "kiwi", None])
        )
        assert [o.value_or(-1) for o in options] == [3, 0, -1, -1]

    @pytest.mark.asyncio
    async def test_result_async_then_validate(self):
        async def load(user_id):
            return Result.success({"id": user_id, "active": False})

        result = (await Result.success(9).map_async(load)).validate(
            lambda user: user["active"], "INACTIVE"
        )
        assert result == Failure("INACTIVE")
