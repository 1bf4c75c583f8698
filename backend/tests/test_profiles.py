"""Tests for profiles, leaderboard, achievements, onboarding and team listing."""

import pytest

from habitquest.core.exceptions import InvalidProfileDataError, TeamNotFoundError, TemplateNotFoundError
from habitquest.services import onboarding, profiles, teams

from conftest import OTHER_USER_ID, USER_ID, get_row


class TestProfile:
    def test_new_user_gets_empty_profile(self, store):
        result = profiles.get_profile(USER_ID)

        assert result["profile"]["coins"] == 0
        assert result["profile"]["xp"] == 0
        assert result["profile"]["level"] == 1
        assert result["level_progress"] == 0.0

    def test_existing_profile_untouched(self, store, make_profile):
        make_profile(coins=75, xp=1500, level=2)

        result = profiles.get_profile(USER_ID)

        assert result["profile"]["coins"] == 75
        assert result["level_progress"] == pytest.approx(0.5)
        assert len(store.query("profiles")) == 1

    def test_edit_display_fields(self, store, make_profile):
        make_profile()

        result = profiles.edit_profile(USER_ID, {"display_name": "  Sam ", "username": "sam"})

        assert result["data"]["display_name"] == "Sam"
        assert result["data"]["username"] == "sam"
        assert "leaderboard" in result["stale"]

    def test_coins_are_not_editable(self, store, make_profile):
        make_profile(coins=10)

        with pytest.raises(InvalidProfileDataError):
            profiles.edit_profile(USER_ID, {"coins": 10000})

        assert get_row(store, "profiles", USER_ID)["coins"] == 10

    def test_blank_username_rejected(self, make_profile):
        make_profile()

        with pytest.raises(InvalidProfileDataError):
            profiles.edit_profile(USER_ID, {"username": "  "})


class TestLeaderboard:
    def test_ranked_by_xp(self, store):
        store.insert("global_leaderboard", {"username": "ana", "xp": 300, "streak": 2})
        store.insert("global_leaderboard", {"username": "ben", "xp": 900, "streak": 1})
        store.insert("global_leaderboard", {"username": "cy", "xp": 100, "streak": None})

        entries = profiles.get_leaderboard()["entries"]

        assert [(e["rank"], e["username"]) for e in entries] == [(1, "ben"), (2, "ana"), (3, "cy")]
        assert entries[2]["streak"] == 0

    def test_limit(self, store):
        for xp in (10, 20, 30):
            store.insert("global_leaderboard", {"username": f"u{xp}", "xp": xp})

        assert len(profiles.get_leaderboard(limit=2)["entries"]) == 2


class TestAchievements:
    def test_percent_is_capped(self, store):
        store.insert("achievements", {"user_id": USER_ID, "title": "Ten", "progress": 4, "target": 10})
        store.insert("achievements", {"user_id": USER_ID, "title": "Five", "progress": 8, "target": 5})
        store.insert("achievements", {"user_id": USER_ID, "title": "Odd", "progress": 3, "target": 0})

        percents = {a["title"]: a["percent"] for a in profiles.get_achievements(USER_ID)["achievements"]}

        assert percents == {"Ten": 40.0, "Five": 100.0, "Odd": 0.0}


class TestOnboarding:
    @pytest.fixture
    def template(self, store):
        return store.insert("habit_templates", {
            "title": "Morning Run",
            "description": "20 minutes outside",
            "duration_minutes": 20,
            "frequency": "daily",
            "theme": "fitness",
        })

    def test_saves_goal_and_profile(self, store):
        result = onboarding.submit_onboarding(USER_ID, " fitness ", "Get fit", "75kg", display_name="Sam")

        assert result["data"]["goal"]["category"] == "fitness"
        assert result["data"]["habit"] is None
        assert get_row(store, "profiles", USER_ID)["display_name"] == "Sam"
        assert store.query("habit_statistics") == []

    def test_template_seeds_first_habit(self, store, template):
        result = onboarding.submit_onboarding(USER_ID, "fitness", template_id=template["id"])

        habit = result["data"]["habit"]
        assert habit["title"] == "Morning Run"
        assert habit["duration_minutes"] == 20
        assert habit["category"] == "fitness"
        assert "habits" in result["stale"]

        statistics = store.query("habit_statistics", {"habit_id": habit["id"]})
        assert len(statistics) == 1
        assert statistics[0]["user_id"] == USER_ID
        assert statistics[0]["streak_history"] == [0]

    def test_unknown_template_writes_nothing(self, store):
        with pytest.raises(TemplateNotFoundError):
            onboarding.submit_onboarding(USER_ID, "fitness", template_id="missing")

        assert store.query("user_goals") == []
        assert store.query("profiles") == []

    def test_blank_category_rejected(self, store):
        with pytest.raises(InvalidProfileDataError):
            onboarding.submit_onboarding(USER_ID, "  ")

    def test_templates_listed_by_title(self, store, template):
        store.insert("habit_templates", {"title": "Journal"})

        titles = [t["title"] for t in onboarding.list_templates()["templates"]]

        assert titles == ["Journal", "Morning Run"]

    def test_goals_listed_per_user(self, make_goal):
        make_goal(category="fitness")
        make_goal(user_id=OTHER_USER_ID, category="reading")

        goals = onboarding.list_goals(USER_ID)["goals"]

        assert [g["category"] for g in goals] == ["fitness"]


class TestTeamQueries:
    def test_search_is_case_insensitive(self, store):
        store.insert("teams", {"name": "Early Birds"})
        store.insert("teams", {"name": "Night Owls"})

        names = [t["name"] for t in teams.list_teams("bird")["teams"]]

        assert names == ["Early Birds"]

    def test_detail_includes_members(self, store):
        team = store.insert("teams", {"name": "Early Birds"})
        store.insert("team_members", {"team_id": team["id"], "user_id": USER_ID, "role": "leader"})

        detail = teams.get_team_detail(team["id"])

        assert detail["member_count"] == 1

    def test_detail_unknown_team(self, store):
        with pytest.raises(TeamNotFoundError):
            teams.get_team_detail("missing")
