import asyncio
import json
import os
from types import SimpleNamespace
from unittest import TestCase
from unittest.mock import patch

from fastapi.testclient import TestClient

from nameradar.backend import main as main_module
from nameradar.backend.logging_config import request_id_var
from nameradar.backend.main import app, create_app
from nameradar.backend.services import subscription_service


_TEN = [{"name": "Solace", "explanation": "calm, durable"}] + [
	{"name": f"Stride{i}", "explanation": f"motion {i}"} for i in range(1, 10)
]


class _FakeCompletions:
	def __init__(self, *, content=None, delay_s: float = 0.0):
		self._content = content
		self._delay_s = delay_s
		self.calls = 0

	async def create(self, **_kwargs):
		self.calls += 1
		if self._delay_s:
			await asyncio.sleep(self._delay_s)
		message = SimpleNamespace(content=self._content)
		return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class _FakeClient:
	def __init__(self, **kwargs):
		self.completions = _FakeCompletions(**kwargs)
		self.chat = SimpleNamespace(completions=self.completions)

	async def close(self) -> None:
		return None


class GenerateBrandsApiTests(TestCase):
	def setUp(self) -> None:
		self.client = TestClient(app)
		self._env = patch.dict(
			os.environ,
			{"FIREWORKS_API_KEY": "test-key", "BRAND_PROVIDER_TIMEOUT_S": "5", "NAMERADAR_SUBSCRIBED_USERS": ""},
			clear=False,
		)
		self._env.start()
		subscription_service.reset()
		subscription_service.grant("paying-user")

	def tearDown(self) -> None:
		subscription_service.reset()
		self._env.stop()

	def _post(self, fake: _FakeClient, *, user=None, **kwargs):
		headers = dict(kwargs.pop("headers", {}))
		if user:
			headers["X-User-ID"] = user
		with patch("nameradar.backend.services.completion_client._build_client", return_value=fake):
			return self.client.post("/api/generate-brands", headers=headers, **kwargs)

	def test_scenario_a_anonymous_caller_gets_401(self) -> None:
		fake = _FakeClient(content=json.dumps(_TEN))
		response = self._post(fake, json={"userInput": "eco sneakers"})
		self.assertEqual(response.status_code, 401)
		self.assertIn("sign in", response.json()["error"])
		self.assertEqual(fake.completions.calls, 0)

	def test_scenario_b_unsubscribed_caller_gets_403(self) -> None:
		fake = _FakeClient(content=json.dumps(_TEN))
		response = self._post(fake, user="free-user", json={"userInput": "eco sneakers"})
		self.assertEqual(response.status_code, 403)
		self.assertEqual(fake.completions.calls, 0)

	def test_entitlement_is_requeried_each_request(self) -> None:
		fake = _FakeClient(content=json.dumps(_TEN))
		self.assertEqual(self._post(fake, user="paying-user", json={"userInput": "eco"}).status_code, 200)
		subscription_service.revoke("paying-user")
		self.assertEqual(self._post(fake, user="paying-user", json={"userInput": "eco"}).status_code, 403)

	def test_scenario_c_empty_input_gets_400_without_network(self) -> None:
		fake = _FakeClient(content=json.dumps(_TEN))
		response = self._post(fake, user="paying-user", json={"userInput": ""})
		self.assertEqual(response.status_code, 400)
		self.assertEqual(response.json(), {"error": "Please provide a brand description."})
		self.assertEqual(fake.completions.calls, 0)

	def test_malformed_json_body_gets_400(self) -> None:
		fake = _FakeClient(content=json.dumps(_TEN))
		response = self._post(
			fake,
			user="paying-user",
			content=b"{not json",
			headers={"Content-Type": "application/json"},
		)
		self.assertEqual(response.status_code, 400)
		self.assertEqual(fake.completions.calls, 0)

	def test_malformed_json_body_from_anonymous_caller_stays_401(self) -> None:
		fake = _FakeClient(content=json.dumps(_TEN))
		response = self._post(fake, content=b"{not json", headers={"Content-Type": "application/json"})
		self.assertEqual(response.status_code, 401)

	def test_scenario_d_plain_array_returns_ten_candidates_in_order(self) -> None:
		fake = _FakeClient(content=json.dumps(_TEN))
		response = self._post(fake, user="paying-user", json={"userInput": "eco sneakers"})
		self.assertEqual(response.status_code, 200)
		self.assertEqual(response.json(), {"brandNames": _TEN})
		self.assertEqual(fake.completions.calls, 1)
		self.assertIn("X-Request-ID", response.headers)

	def test_scenario_e_fenced_block_is_recovered(self) -> None:
		content = "Sure! Here are some names:\n```json\n" + json.dumps(_TEN) + "\n```"
		response = self._post(_FakeClient(content=content), user="paying-user", json={"userInput": "eco sneakers"})
		self.assertEqual(response.status_code, 200)
		self.assertEqual(response.json()["brandNames"], _TEN)

	def test_scenario_f_slow_provider_gets_504(self) -> None:
		os.environ["BRAND_PROVIDER_TIMEOUT_S"] = "0.05"
		fake = _FakeClient(content=json.dumps(_TEN), delay_s=5.0)
		response = self._post(fake, user="paying-user", json={"userInput": "eco sneakers"})
		self.assertEqual(response.status_code, 504)
		self.assertIn("timed out", response.json()["error"])

	def test_request_id_is_echoed(self) -> None:
		fake = _FakeClient(content=json.dumps(_TEN))
		response = self._post(
			fake,
			json={"userInput": "eco sneakers"},
			headers={"X-User-ID": "paying-user", "X-Request-ID": "req-42"},
		)
		self.assertEqual(response.headers["X-Request-ID"], "req-42")


class AppErrorShapeTests(TestCase):
	def setUp(self) -> None:
		self.client = TestClient(app, raise_server_exceptions=False)

	def test_unknown_route_uses_error_shape(self) -> None:
		response = self.client.get("/api/does-not-exist")
		self.assertEqual(response.status_code, 404)
		self.assertEqual(list(response.json()), ["error"])

	def test_wrong_method_uses_error_shape(self) -> None:
		response = self.client.get("/api/generate-brands")
		self.assertEqual(response.status_code, 405)
		self.assertIn("error", response.json())

	def test_collaborator_crash_is_generic_500(self) -> None:
		with patch(
			"nameradar.backend.services.caller_service.subscription_service.is_subscribed",
			side_effect=RuntimeError("billing db password=hunter2"),
		):
			response = self.client.post(
				"/api/generate-brands",
				headers={"X-User-ID": "paying-user"},
				json={"userInput": "eco sneakers"},
			)
		self.assertEqual(response.status_code, 500)
		self.assertEqual(response.json(), {"error": "An unexpected error occurred. Please try again."})


class HealthApiTests(TestCase):
	def setUp(self) -> None:
		self.client = TestClient(app)

	def test_health_reports_provider_readiness(self) -> None:
		with patch.dict(os.environ, {"FIREWORKS_API_KEY": "test-key", "BRAND_PROVIDER_TIMEOUT_S": "60"}, clear=False):
			ready = self.client.get("/api/health").json()
		with patch.dict(os.environ, {"FIREWORKS_API_KEY": ""}, clear=False):
			not_ready = self.client.get("/api/health").json()

		self.assertEqual(ready, {"status": "ok", "provider_ready": True, "provider_warnings": []})
		self.assertFalse(not_ready["provider_ready"])
		self.assertEqual(len(not_ready["provider_warnings"]), 1)
		self.assertNotIn("FIREWORKS", not_ready["provider_warnings"][0])


class DeploymentHostTests(TestCase):
	def setUp(self) -> None:
		self._env = patch.dict(
			os.environ,
			{
				"FIREWORKS_API_KEY": "test-key",
				"NAMERADAR_TRUSTED_HOSTS": "nameradar.example.com, api.nameradar.example.com",
				"NAMERADAR_CORS_ORIGINS": "https://nameradar.example.com",
			},
			clear=False,
		)
		self._env.start()

	def tearDown(self) -> None:
		self._env.stop()

	def test_configured_host_reaches_the_pipeline(self) -> None:
		client = TestClient(create_app(), base_url="https://nameradar.example.com")
		response = client.post("/api/generate-brands", json={"userInput": "eco"})
		self.assertEqual(response.status_code, 401)
		self.assertEqual(list(response.json()), ["error"])

	def test_configured_cors_origin_is_allowed(self) -> None:
		client = TestClient(create_app(), base_url="https://api.nameradar.example.com")
		response = client.get("/api/health", headers={"Origin": "https://nameradar.example.com"})
		self.assertEqual(response.status_code, 200)
		self.assertEqual(response.headers["access-control-allow-origin"], "https://nameradar.example.com")

	def test_env_lists_fall_back_to_defaults(self) -> None:
		with patch.dict(os.environ, {"NAMERADAR_TRUSTED_HOSTS": " , ", "NAMERADAR_CORS_ORIGINS": ""}, clear=False):
			self.assertEqual(main_module.trusted_hosts(), ["127.0.0.1", "localhost", "testserver"])
			self.assertIn("http://localhost:3000", main_module.cors_allow_origins())


class RequestContextLoggingTests(TestCase):
	def test_crash_keeps_request_id_for_error_log(self) -> None:
		client = TestClient(app, raise_server_exceptions=False)
		seen = []
		with patch(
			"nameradar.backend.services.caller_service.subscription_service.is_subscribed",
			side_effect=RuntimeError("billing down"),
		), patch.object(
			main_module.logger,
			"exception",
			side_effect=lambda *args, **kwargs: seen.append(request_id_var.get()),
		), self.assertLogs("nameradar.backend.middleware", level="INFO") as logs:
			response = client.post(
				"/api/generate-brands",
				headers={"X-User-ID": "paying-user", "X-Request-ID": "req-crash"},
				json={"userInput": "eco sneakers"},
			)
		self.assertEqual(response.status_code, 500)
		self.assertEqual(seen, ["req-crash"])
		self.assertTrue(any("-> 500" in line for line in logs.output))
