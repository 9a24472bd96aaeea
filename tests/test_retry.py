import asyncio
import unittest

import aiohttp

from lprewards.utils.retry import async_retry


class TestAsyncRetry(unittest.IsolatedAsyncioTestCase):
    async def test_retries_network_errors_then_succeeds(self):
        calls = []

        @async_retry(max_attempts=3, base_delay=0)
        async def flaky():
            calls.append(1)
            if len(calls) < 2:
                raise aiohttp.ClientError("reset")
            return "ok"

        self.assertEqual(await flaky(), "ok")
        self.assertEqual(len(calls), 2)

    async def test_gives_up_after_max_attempts(self):
        calls = []

        @async_retry(max_attempts=3, base_delay=0)
        async def down():
            calls.append(1)
            raise asyncio.TimeoutError()

        with self.assertRaises(asyncio.TimeoutError):
            await down()
        self.assertEqual(len(calls), 3)

    async def test_other_errors_propagate_immediately(self):
        calls = []

        @async_retry(max_attempts=3, base_delay=0)
        async def broken():
            calls.append(1)
            raise ValueError("bad payload")

        with self.assertRaises(ValueError):
            await broken()
        self.assertEqual(len(calls), 1)

    async def test_rejects_zero_attempts(self):
        with self.assertRaises(ValueError):
            async_retry(max_attempts=0)

    async def test_custom_exceptions(self):
        calls = []

        @async_retry(max_attempts=2, base_delay=0, exceptions=(KeyError,))
        async def lookup():
            calls.append(1)
            raise KeyError("missing")

        with self.assertRaises(KeyError):
            await lookup()
        self.assertEqual(len(calls), 2)
