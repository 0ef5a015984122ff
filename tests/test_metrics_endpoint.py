import asyncio
import unittest

import httpx

from dashboard.main import app


class TestServiceEndpoints(unittest.TestCase):
    def _get(self, path: str) -> httpx.Response:
        async def _request() -> httpx.Response:
            transport = httpx.ASGITransport(app=app)
            async with httpx.AsyncClient(
                transport=transport, base_url="http://testserver"
            ) as client:
                return await client.get(path)

        return asyncio.run(_request())

    def test_metrics_endpoint_is_available(self) -> None:
        response = self._get("/metrics")

        self.assertEqual(response.status_code, 200)
        self.assertIn("# HELP", response.text)

    def test_health_endpoint_reports_ok(self) -> None:
        response = self._get("/health")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "ok"})


if __name__ == "__main__":
    unittest.main()
