"""Tests for PredictionService.

Tests cover:
- Remote success passes the API data through unchanged
- Every failure shape on /api/predict is answered with a fallback prediction
- Exactly one remote attempt per call (no retries)
- What-if request derivation
- Display-only endpoints decode their data and propagate errors
"""

import json
import random

import httpx
import pytest

from strength_compass.core.errors import ApiClientError
from strength_compass.predictions.service import PredictionService, build_what_if_request
from strength_compass.schemas.athlete import AthleteProfile, Equipment, Sex
from strength_compass.schemas.prediction import PredictionRequest, WhatIfScenario


def _recording_handler(response: httpx.Response | Exception, calls: list[httpx.Request]):
    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if isinstance(response, Exception):
            raise response
        return response

    return handler


@pytest.mark.asyncio
async def test_remote_success_passes_data_through(make_api_client, envelope, sample_profile, remote_prediction_data, fixed_clock):
    calls: list[httpx.Request] = []
    client = make_api_client(_recording_handler(httpx.Response(200, json=envelope(remote_prediction_data)), calls))
    service = PredictionService(client, rng=random.Random(0), clock=fixed_clock)

    prediction = await service.get_prediction(PredictionRequest.from_profile(sample_profile))

    assert prediction.total_pred == 612.5
    assert prediction.squat_pred == 230.0
    assert prediction.metadata.model_version == "xgb-2.3.1"
    assert not prediction.is_fallback
    assert len(calls) == 1
    assert calls[0].method == "POST"
    assert calls[0].url.path == "/api/predict"
    assert json.loads(calls[0].content) == {"sex": "M", "age": 28, "bw": 70.0, "equip": "Raw"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"message": "boom"}),
        httpx.Response(404),
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json={"success": False, "error": "model offline"}),
        httpx.Response(200, json={"success": True, "data": None}),
        httpx.Response(200, json={"success": True, "data": {"squat_pred": 200}}),
        httpx.Response(400, json={"success": False, "error": "Unknown equipment"}),
        httpx.ConnectError("connection refused"),
        httpx.ReadTimeout("timed out"),
    ],
    ids=[
        "http-500",
        "http-404",
        "invalid-json",
        "success-false",
        "missing-data",
        "malformed-data",
        "rejected-equipment",
        "network-error",
        "timeout",
    ],
)
async def test_any_remote_failure_returns_fallback(make_api_client, sample_profile, fixed_clock, response):
    calls: list[httpx.Request] = []
    client = make_api_client(_recording_handler(response, calls))
    service = PredictionService(client, rng=random.Random(7), clock=fixed_clock)

    prediction = await service.get_prediction(PredictionRequest.from_profile(sample_profile))

    assert prediction.is_fallback
    assert prediction.metadata.prediction_date == fixed_clock().isoformat()
    assert 523 <= prediction.total_pred <= 577
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_fallback_is_reproducible_with_seeded_rng(make_api_client, sample_profile, fixed_clock):
    client = make_api_client(lambda request: httpx.Response(503))
    request = PredictionRequest.from_profile(sample_profile)

    first = await PredictionService(client, rng=random.Random(3), clock=fixed_clock).get_prediction(request)
    second = await PredictionService(client, rng=random.Random(3), clock=fixed_clock).get_prediction(request)

    assert first == second


def test_build_what_if_request_applies_deltas(sample_profile):
    scenario = WhatIfScenario(age_adjustment=5, bodyweight_adjustment=-3.5, equipment_change=Equipment.WRAPS)

    request = build_what_if_request(sample_profile, scenario)

    assert request == PredictionRequest(sex=Sex.MALE, age=33, bw=66.5, equip="Wraps")


def test_build_what_if_request_keeps_base_equipment(sample_profile):
    request = build_what_if_request(sample_profile, WhatIfScenario(age_adjustment=2))

    assert request.equip == "Raw"
    assert request.bw == 70.0


def test_build_what_if_request_does_not_clamp_derived_values():
    profile = AthleteProfile(sex=Sex.FEMALE, age=85, bodyweight=35.0, equipment=Equipment.RAW)
    scenario = WhatIfScenario(age_adjustment=20, bodyweight_adjustment=-30)

    request = build_what_if_request(profile, scenario)

    assert request.age == 105
    assert request.bw == 5.0


@pytest.mark.asyncio
async def test_what_if_posts_derived_request(make_api_client, envelope, sample_profile, remote_prediction_data):
    calls: list[httpx.Request] = []
    client = make_api_client(_recording_handler(httpx.Response(200, json=envelope(remote_prediction_data)), calls))
    service = PredictionService(client)

    scenario = WhatIfScenario(ageAdjustment=-3, bodyweightAdjustment=10, equipmentChange="Single-ply", scenario_name="Bulk")
    prediction = await service.get_what_if_prediction(sample_profile, scenario)

    assert prediction.total_pred == 612.5
    assert json.loads(calls[0].content) == {"sex": "M", "age": 25, "bw": 80.0, "equip": "Single-ply"}


@pytest.mark.asyncio
async def test_peer_comparison_decodes_camel_case(make_api_client, envelope, female_profile):
    calls: list[httpx.Request] = []
    data = {
        "percentile": 64.0,
        "averageForDemographic": 310.5,
        "sampleSize": 1840,
        "distribution": [{"range": "300-350", "count": 412, "percentage": 22.4}],
    }
    client = make_api_client(_recording_handler(httpx.Response(200, json=envelope(data)), calls))

    comparison = await PredictionService(client).get_peer_comparison(female_profile)

    assert comparison.average_for_demographic == 310.5
    assert comparison.sample_size == 1840
    assert comparison.distribution[0].count == 412
    assert calls[0].url.path == "/api/peer-comparison"
    assert json.loads(calls[0].content) == {"sex": "F", "age": 45, "bodyweight": 68.2, "equipment": "Raw"}


@pytest.mark.asyncio
async def test_peer_comparison_propagates_transport_errors(make_api_client, sample_profile):
    client = make_api_client(lambda request: httpx.Response(500))

    with pytest.raises(ApiClientError) as exc_info:
        await PredictionService(client).get_peer_comparison(sample_profile)

    assert exc_info.value.code == "HTTP_500"


@pytest.mark.asyncio
async def test_model_explanation_decodes_and_uses_get(make_api_client, envelope):
    calls: list[httpx.Request] = []
    data = {
        "features": [{"name": "bodyweight", "importance": 0.42, "description": "Body mass"}],
        "modelInfo": {"algorithm": "XGBoost", "accuracy": 0.91, "lastTrained": "2024-05-01", "sampleSize": 250000},
    }
    client = make_api_client(_recording_handler(httpx.Response(200, json=envelope(data)), calls))

    explanation = await PredictionService(client).get_model_explanation()

    assert calls[0].method == "GET"
    assert calls[0].url.path == "/api/model/explanation"
    assert explanation.features[0].name == "bodyweight"
    assert explanation.model_info.algorithm == "XGBoost"
    assert explanation.model_info.sample_size == 250000


@pytest.mark.asyncio
async def test_model_explanation_reports_api_failure(make_api_client):
    client = make_api_client(lambda request: httpx.Response(200, json={"success": False, "error": "not trained"}))

    with pytest.raises(ApiClientError) as exc_info:
        await PredictionService(client).get_model_explanation()

    assert exc_info.value.code == "REQUEST_FAILED"
    assert exc_info.value.error.message == "not trained"


@pytest.mark.asyncio
async def test_model_explanation_rejects_malformed_data(make_api_client, envelope):
    client = make_api_client(lambda request: httpx.Response(200, json=envelope({"features": []})))

    with pytest.raises(ApiClientError) as exc_info:
        await PredictionService(client).get_model_explanation()

    assert exc_info.value.code == "INVALID_RESPONSE"
