"""
API tests for journaling: analysis, coins, streaks and rewards.
"""

from datetime import date, datetime, timedelta, timezone

from conftest import seed_entry, seed_profile
from mindpal.core.config import settings
from mindpal.routers.journal import next_streak

JOURNAL_URL = f"{settings.api_v1_prefix}/journal"


class TestNextStreak:
    def test_first_entry(self):
        assert next_streak(0, None, date(2024, 3, 5)) == 1

    def test_same_day_unchanged(self):
        last = datetime(2024, 3, 5, 8, tzinfo=timezone.utc)
        assert next_streak(4, last, date(2024, 3, 5)) == 4

    def test_next_day_extends(self):
        last = datetime(2024, 3, 4, 23, tzinfo=timezone.utc)
        assert next_streak(4, last, date(2024, 3, 5)) == 5

    def test_gap_resets(self):
        last = datetime(2024, 3, 1, tzinfo=timezone.utc)
        assert next_streak(4, last, date(2024, 3, 5)) == 1


class TestCreateEntry:
    def test_requires_auth(self, client):
        response = client.post(JOURNAL_URL, json={"text": "Hello there"})

        assert response.status_code in (401, 403)

    def test_rejects_blank_text(self, client, headers):
        response = client.post(JOURNAL_URL, json={"text": "   "}, headers=headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "Journal text is required"

    def test_first_entry_creates_profile_and_pays(self, client, headers, user_id, fake_supabase):
        response = client.post(JOURNAL_URL, json={"text": "I am very happy today"}, headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["entry"]["mood"] == "happy"
        assert body["entry"]["word_count"] == 5
        assert body["pet_mood"] == "happy"
        assert body["mood_emoji"]
        assert body["coins"] == settings.starting_coins + settings.journal_coin_reward
        assert body["coins_earned"] == settings.journal_coin_reward
        assert body["streak"] == 1
        assert body["new_rewards"] == []

        profile = fake_supabase.tables["profiles"][0]
        assert profile["id"] == user_id
        assert profile["total_entries"] == 1
        assert profile["last_journaled"]

    def test_user_mood_is_stored(self, client, headers):
        response = client.post(
            JOURNAL_URL, json={"text": "Feeling lonely, nobody cares", "mood": "sad"}, headers=headers
        )

        entry = response.json()["entry"]
        assert entry["user_mood"] == "sad"
        assert entry["mood"] == "lonely"

    def test_streak_continues_from_yesterday(self, client, headers, user_id, fake_supabase):
        yesterday = datetime.now(timezone.utc) - timedelta(days=1)
        seed_profile(fake_supabase, user_id, streak=3, last_journaled=yesterday.isoformat())

        response = client.post(JOURNAL_URL, json={"text": "I am very happy today"}, headers=headers)

        assert response.json()["streak"] == 4

    def test_ai_result_is_used_and_risk_screened(self, client, headers, analyzer):
        analyzer.result = {"mood": "sad", "confidence": 0.9, "riskLevel": "low"}

        response = client.post(
            JOURNAL_URL, json={"text": "I want to die, nothing helps"}, headers=headers
        )

        entry = response.json()["entry"]
        assert entry["mood"] == "sad"
        assert entry["risk_level"] == "high"
        assert "want to die" in entry["triggers"]
        assert response.json()["pet_mood"] == "sad"

    def test_ai_outage_does_not_fail_the_request(self, client, headers, analyzer):
        analyzer.error = RuntimeError("bedrock down")

        response = client.post(JOURNAL_URL, json={"text": "I am very happy today"}, headers=headers)

        assert response.status_code == 200
        assert response.json()["entry"]["mood"] == "happy"

    def test_new_rewards_are_reported(self, client, headers, user_id, fake_supabase):
        now = datetime.now(timezone.utc)
        seed_profile(fake_supabase, user_id)
        seed_entry(fake_supabase, user_id, "grateful", now - timedelta(days=2))
        seed_entry(fake_supabase, user_id, "hopeful", now - timedelta(days=1))

        response = client.post(JOURNAL_URL, json={"text": "I am very happy today"}, headers=headers)

        rewards = response.json()["new_rewards"]
        assert [r["type"] for r in rewards] == ["positive_streak"]
        assert rewards[0]["coin_reward"] == 30

    def test_claimed_rewards_are_not_reported_again(self, client, headers, user_id, fake_supabase):
        now = datetime.now(timezone.utc)
        seed_profile(fake_supabase, user_id)
        seed_entry(fake_supabase, user_id, "grateful", now - timedelta(days=2))
        seed_entry(fake_supabase, user_id, "hopeful", now - timedelta(days=1))
        fake_supabase.tables["kv_store"].append(
            {"key": f"rewards:{user_id}:positive_streak", "value": {"type": "positive_streak"}}
        )

        response = client.post(JOURNAL_URL, json={"text": "I am very happy today"}, headers=headers)

        assert response.json()["new_rewards"] == []


class TestListEntries:
    def test_newest_first_with_limit(self, client, headers, user_id, fake_supabase):
        now = datetime.now(timezone.utc)
        for days_ago, mood in [(3, "sad"), (2, "calm"), (1, "happy")]:
            seed_entry(fake_supabase, user_id, mood, now - timedelta(days=days_ago))
        seed_entry(fake_supabase, "someone-else", "angry", now)

        response = client.get(JOURNAL_URL, params={"limit": 2}, headers=headers)

        assert response.status_code == 200
        assert [e["mood"] for e in response.json()] == ["happy", "calm"]


class TestAnalyze:
    def test_analyze_does_not_store(self, client, headers, fake_supabase):
        response = client.post(
            f"{JOURNAL_URL}/analyze", json={"text": "Feeling lonely, nobody cares"}, headers=headers
        )

        assert response.status_code == 200
        body = response.json()
        assert body["analysis"]["mood"] == "lonely"
        assert body["summary"].startswith("I detected lonely")
        assert fake_supabase.tables["journal_entries"] == []
