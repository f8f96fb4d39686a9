"""HTTP surface: camelCase payloads, status codes and domain error mapping."""

from fitcoach.core.errors import ProviderError

API = "/api/v1"


async def start_session(client, **body):
    response = await client.post(f"{API}/sessions", json=body)
    assert response.status_code == 201
    return response.json()


async def test_root_and_health(client):
    assert (await client.get("/")).json()["status"] == "ok"
    response = await client.get(f"{API}/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"

    ready = await client.get(f"{API}/health/ready")
    assert ready.status_code == 200
    assert ready.json()["database"] == "connected"
    assert ready.json()["provider"] in ("configured", "missing_api_key")


async def test_profile_created_on_first_access_and_updated(client):
    response = await client.get(f"{API}/profile")
    assert response.status_code == 200
    assert response.json()["name"] == "Athlete"

    response = await client.patch(
        f"{API}/profile",
        json={"age": 32, "heightCm": 175, "sex": "female", "goal": {"direction": "lose", "lbsPerWeek": 0.5}},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["heightCm"] == 175
    assert body["weeklyGoal"] == -0.5
    assert body["goal"] == {"direction": "lose", "lbsPerWeek": 0.5}


async def test_profile_rejects_null_name(client):
    response = await client.patch(f"{API}/profile", json={"name": None})
    assert response.status_code == 422
    assert response.json()["field"] == "name"
    assert (await client.get(f"{API}/profile")).json()["name"] == "Athlete"


async def test_unknown_user_header_is_404(client):
    response = await client.get(f"{API}/profile", headers={"X-User-Id": "999"})
    assert response.status_code == 404
    assert "999" in response.json()["detail"]


async def test_weight_log_roundtrip(client):
    response = await client.post(f"{API}/weight", json={"weight": 181.4})
    assert response.status_code == 201
    assert response.json()["weight"] == 181.4

    logs = (await client.get(f"{API}/weight")).json()
    assert [log["weight"] for log in logs] == [181.4]

    assert (await client.post(f"{API}/weight", json={"weight": 0})).status_code == 422


async def test_session_exercise_flow(client):
    session = await start_session(client, name="Upper")
    assert session["endTime"] is None

    response = await client.post(
        f"{API}/exercises",
        json={"sessionId": session["id"], "exerciseName": "Bench Press", "reps": 10, "sets": 3, "weight": 135},
    )
    assert response.status_code == 201
    exercise = response.json()
    assert exercise["manuallyEdited"] is False
    assert exercise["weightUnit"] == "lbs"

    response = await client.patch(f"{API}/exercises/{exercise['id']}", json={"reps": 12})
    assert response.json()["manuallyEdited"] is True

    today = (await client.get(f"{API}/sessions/today")).json()
    assert today["id"] == session["id"]
    assert [e["exerciseName"] for e in today["exercises"]] == ["Bench Press"]

    names = (await client.get(f"{API}/exercises/names")).json()
    assert names[0]["name"] == "Bench Press"
    assert names[0]["usageCount"] == 1

    finished = (await client.post(f"{API}/sessions/{session['id']}/finish")).json()
    assert finished["endTime"] is not None


async def test_invalid_reps_reports_field(client):
    session = await start_session(client)
    response = await client.post(
        f"{API}/exercises", json={"sessionId": session["id"], "exerciseName": "Squat", "reps": 0}
    )
    assert response.status_code == 422
    assert response.json()["field"] == "reps"


async def test_delete_session_cascades(client):
    session = await start_session(client)
    await client.post(f"{API}/exercises", json={"sessionId": session["id"], "exerciseName": "Row", "reps": 8})
    await client.post(f"{API}/cardio", json={"sessionId": session["id"], "activityType": "Rowing", "durationMinutes": 12})

    assert (await client.delete(f"{API}/sessions/{session['id']}")).status_code == 204
    assert (await client.get(f"{API}/sessions/{session['id']}/exercises")).status_code == 404
    assert (await client.get(f"{API}/cardio")).json() == []
    assert (await client.get(f"{API}/sessions/today")).status_code == 404


async def test_analytics_endpoints(client):
    session = await start_session(client)
    await client.post(f"{API}/exercises", json={"sessionId": session["id"], "exerciseName": "Curl", "reps": 10, "weight": 30})
    await client.post(f"{API}/cardio", json={"sessionId": session["id"], "activityType": "running", "durationMinutes": 20})

    summary = (await client.get(f"{API}/analytics/summary")).json()
    assert summary["calories"] == {"base": 2000, "workout": 0, "target": 2000}
    assert summary["weight"]["sevenDayAvg"] == 0

    assert (await client.get(f"{API}/analytics/workout-count")).json() == {"count": 1}
    history = (await client.get(f"{API}/analytics/exercise-history/curl")).json()
    assert history[0]["reps"] == 10
    assert (await client.get(f"{API}/analytics/exercise-names")).json() == ["Curl"]

    cardio = (await client.get(f"{API}/analytics/cardio-summary", params={"activityType": "running"})).json()
    assert cardio == [{"activityType": "running", "totalMinutes": 20.0, "totalSessions": 1}]


async def test_voice_parse_and_clarify(client, fake_provider):
    fake_provider.json_reply = {"exercise": "curls", "confidence": "low", "missing": ["reps"]}
    response = await client.post(f"{API}/voice/parse", json={"text": "did some curls"})
    assert response.status_code == 200
    body = response.json()
    assert body["confidence"] == "low"
    assert "reps" in body["missing"]

    fake_provider.text_reply = "How many reps?"
    response = await client.post(
        f"{API}/voice/clarify", json={"rawInput": "did some curls", "missingFields": ["reps"]}
    )
    assert response.json() == {"question": "How many reps?"}


async def test_voice_transcribe_upload(client, fake_provider):
    fake_provider.transcript = "ten push ups"
    response = await client.post(
        f"{API}/voice/transcribe", files={"audio": ("clip.webm", b"\x1a\x45\xdf\xa3", "audio/webm")}
    )
    assert response.status_code == 200
    assert response.json() == {"text": "ten push ups"}
    assert fake_provider.calls[0][2] == "audio/webm"


async def test_voice_parse_audio_returns_transcript_and_draft(client, fake_provider):
    fake_provider.transcript = "three sets of eight rows at sixty kilos"
    fake_provider.json_reply = {"exercise": "rows", "reps": 8, "sets": 3, "weight": 60, "unit": "kg", "confidence": "high"}
    response = await client.post(
        f"{API}/voice/parse-audio", files={"audio": ("clip.webm", b"\x1a\x45\xdf\xa3", "audio/webm")}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["text"] == "three sets of eight rows at sixty kilos"
    assert body["parsed"]["exercise"] == "rows"
    assert body["parsed"]["unit"] == "kg"
    assert [call[0] for call in fake_provider.calls] == ["transcribe", "json"]


async def test_voice_confirm_logs_draft_with_transcript(client):
    session = await start_session(client)
    response = await client.post(
        f"{API}/voice/confirm",
        json={
            "sessionId": session["id"],
            "draft": {"exercise": "squat", "reps": 5, "sets": 3, "weight": 100, "unit": "kg"},
            "transcript": "three sets of five squats at a hundred kilos",
        },
    )
    assert response.status_code == 201
    exercise = response.json()
    assert exercise["exerciseName"] == "squat"
    assert (exercise["reps"], exercise["sets"], exercise["weight"], exercise["weightUnit"]) == (5, 3, 100.0, "kg")
    assert exercise["rawVoiceInput"] == "three sets of five squats at a hundred kilos"
    assert exercise["manuallyEdited"] is False

    listed = (await client.get(f"{API}/sessions/{session['id']}/exercises")).json()
    assert [e["id"] for e in listed] == [exercise["id"]]


async def test_voice_confirm_incomplete_draft_reports_field(client):
    session = await start_session(client)
    response = await client.post(
        f"{API}/voice/confirm",
        json={"sessionId": session["id"], "draft": {"exercise": "curls", "confidence": "low", "missing": ["reps"]}},
    )
    assert response.status_code == 422
    assert response.json()["field"] == "reps"


async def test_voice_confirm_unknown_session_is_404(client):
    response = await client.post(
        f"{API}/voice/confirm", json={"sessionId": 999, "draft": {"exercise": "squat", "reps": 5}}
    )
    assert response.status_code == 404


async def test_provider_failure_maps_to_502(client, fake_provider):
    fake_provider.error = ProviderError("completion", "upstream unavailable")
    response = await client.post(f"{API}/voice/parse", json={"text": "bench press"})
    assert response.status_code == 502
    assert response.json()["operation"] == "completion"


async def test_ask_coach(client, fake_provider):
    fake_provider.json_reply = "You are doing great."
    response = await client.post(f"{API}/analytics/ask", json={"question": "How am I doing?"})
    assert response.status_code == 200
    assert response.json() == {"answer": "You are doing great.", "recommendations": None, "suggestedWorkout": None}
    assert "How am I doing?" in fake_provider.calls[0][2]
