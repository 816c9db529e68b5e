"""Tests for the GoldJournal command line."""

from datetime import date, datetime

import click
import pytest
import toml
from click.testing import CliRunner

from goldjournal.cli.journal import parse_tags
from goldjournal.cli.main import LAZY_SUBCOMMANDS, cli
from goldjournal.cli.report import parse_month
from goldjournal.cli.session import parse_level, parse_news, parse_zone
from goldjournal.db.store import JournalStore
from goldjournal.models import KeyLevel, LiquidityZone, Trade


@pytest.fixture
def journal_env(tmp_path, monkeypatch):
    """Point the CLI at a throwaway config and database."""
    db_path = tmp_path / "journal.db"
    config_path = tmp_path / "config.toml"
    config_path.write_text(toml.dumps({"journal": {"db_path": str(db_path)}}))
    monkeypatch.setenv("GOLDJOURNAL_CONFIG", str(config_path))
    return JournalStore(db_path)


@pytest.fixture
def runner():
    return CliRunner()


class TestCommandRegistry:
    def test_every_lazy_command_loads(self, runner):
        for name in LAZY_SUBCOMMANDS:
            result = runner.invoke(cli, [name, "--help"])

            assert result.exit_code == 0, f"{name}: {result.output}"

    def test_unknown_command(self, runner):
        result = runner.invoke(cli, ["nope"])

        assert result.exit_code != 0


class TestLogCommand:
    def test_log_stores_trade_and_streak(self, runner, journal_env):
        result = runner.invoke(cli, [
            "log",
            "--direction", "long",
            "--setup", "FVG",
            "--outcome", "win",
            "--pnl", "250",
            "--r", "2.5",
            "--grade", "A",
            "--tags", "london, a+ ,",
            "--entry-time", "2024-06-03 09:42",
        ])

        assert result.exit_code == 0, result.output
        assert "Logged trade #1" in result.output

        trade = journal_env.get_trade(1)
        assert trade.market == "GC"
        assert trade.setup_type == "FVG"
        assert trade.pnl == 250.0
        assert trade.entry_time == datetime(2024, 6, 3, 9, 42)
        assert trade.tags == ("london", "a+")
        assert journal_env.get_streak("trades_logged").current_count == 1
        # Entered on a past day, so the profitable-day streak is untouched
        assert journal_env.get_streak("profitable_days") is None

    def test_profitable_day_streak(self, runner, journal_env):
        today = datetime.combine(date.today(), datetime.min.time()).strftime("%Y-%m-%d %H:%M")

        result = runner.invoke(cli, [
            "log", "--direction", "short", "--outcome", "win", "--pnl", "40", "--entry-time", today,
        ])

        assert result.exit_code == 0, result.output
        assert journal_env.get_streak("profitable_days").current_count == 1

    def test_requires_direction(self, runner, journal_env):
        result = runner.invoke(cli, ["log", "--pnl", "10"])

        assert result.exit_code != 0

    def test_rejects_bad_position_size(self, runner, journal_env):
        result = runner.invoke(cli, ["log", "--direction", "long", "--size", "0"])

        assert result.exit_code == 1
        assert "Invalid trade" in result.output


class TestReadCommands:
    @pytest.fixture
    def seeded(self, journal_env):
        journal_env.add_trade(Trade(
            direction="long", setup_type="FVG", outcome="win", pnl=100.0, r_multiple=2.0,
            execution_grade="A", entry_time=datetime(2024, 6, 3, 9, 30),
        ))
        journal_env.add_trade(Trade(
            direction="short", setup_type="OB", outcome="loss", pnl=-50.0, r_multiple=-1.0,
            execution_grade="C", entry_time=datetime(2024, 6, 4, 10, 0),
        ))
        return journal_env

    def test_trades(self, runner, seeded):
        result = runner.invoke(cli, ["trades"])

        assert result.exit_code == 0, result.output
        assert "Total Trades: 2" in result.output

    def test_trades_empty(self, runner, journal_env):
        result = runner.invoke(cli, ["trades"])

        assert result.exit_code == 0
        assert "No trades found" in result.output

    def test_stats(self, runner, seeded):
        result = runner.invoke(cli, ["stats"])

        assert result.exit_code == 0, result.output
        assert "50.0%" in result.output
        assert "2.00" in result.output
        assert "2024-06-03" in result.output
        assert "Rules Followed: 100.0%" in result.output

    def test_edge(self, runner, seeded):
        result = runner.invoke(cli, ["edge"])

        assert result.exit_code == 0, result.output
        assert "FVG" in result.output
        assert "0R to 1R" in result.output
        assert "+$50.00" in result.output

    @pytest.mark.parametrize("points", ["0", "-3"])
    def test_edge_rejects_non_positive_points(self, runner, seeded, points):
        result = runner.invoke(cli, ["edge", "--points", points])

        assert result.exit_code == 2
        assert "Invalid value" in result.output

    def test_edge_points_limits_curve(self, runner, seeded):
        result = runner.invoke(cli, ["edge", "--points", "1"])

        assert result.exit_code == 0, result.output
        assert "6/4" in result.output
        assert "6/3" not in result.output

    def test_calendar(self, runner, seeded):
        result = runner.invoke(cli, ["calendar", "--month", "2024-06"])

        assert result.exit_code == 0, result.output
        assert "June 2024" in result.output
        assert "2 trades" in result.output

    def test_calendar_bad_month(self, runner, journal_env):
        result = runner.invoke(cli, ["calendar", "--month", "2024-13"])

        assert result.exit_code == 1

    def test_calendar_year_out_of_range(self, runner, journal_env):
        result = runner.invoke(cli, ["calendar", "--month", "0000-05"])

        assert result.exit_code == 1
        assert "Invalid month" in result.output
        assert not isinstance(result.exception, ValueError)

    def test_delete(self, runner, seeded):
        result = runner.invoke(cli, ["delete", "1"])

        assert result.exit_code == 0
        assert seeded.get_trade(1) is None

    def test_delete_missing(self, runner, journal_env):
        result = runner.invoke(cli, ["delete", "99"])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_streaks(self, runner, journal_env):
        result = runner.invoke(cli, ["streaks"])

        assert result.exit_code == 0
        assert "Trades Logged" in result.output


class TestCalcCommand:
    def test_calc(self, runner, journal_env):
        result = runner.invoke(cli, ["calc", "--entry", "2045.5", "--stop", "2043.5", "--target", "2049.5"])

        assert result.exit_code == 0, result.output
        assert "$200.00" in result.output
        assert "1 : 2.00" in result.output
        assert "Good R:R" in result.output


class TestInitCommand:
    def test_writes_config_once(self, runner, tmp_path, monkeypatch):
        config_path = tmp_path / "cfg" / "config.toml"
        monkeypatch.setenv("GOLDJOURNAL_CONFIG", str(config_path))

        first = runner.invoke(cli, ["init"])
        second = runner.invoke(cli, ["init"])

        assert first.exit_code == 0
        assert config_path.exists()
        assert "already exists" in second.output


class TestHelpers:
    def test_parse_tags(self):
        assert parse_tags(None) == ()
        assert parse_tags(" a, ,b ") == ("a", "b")

    def test_parse_month(self):
        assert parse_month("2024-06") == (2024, 6)

    @pytest.mark.parametrize("value", ["2024", "2024-00", "June", "0000-05", "10000-01"])
    def test_parse_month_rejects(self, value):
        with pytest.raises(click.BadParameter):
            parse_month(value)

    def test_parse_level(self):
        assert parse_level("PDH @ 2351.4") == KeyLevel(price=2351.4, label="PDH", type="poi")
        assert parse_level("PDL @ 2332 @ Support").type == "support"

    def test_parse_zone(self):
        assert parse_zone("2338 - 2340.5 - Asia lows") == LiquidityZone(
            price_start=2338.0, price_end=2340.5, label="Asia lows"
        )
        assert parse_zone("2338-2340").label == ""

    def test_parse_news(self):
        event = parse_news("08:30 | CPI | HIGH | 0.3%")

        assert (event.time, event.event, event.impact, event.expected) == ("08:30", "CPI", "high", "0.3%")
        assert parse_news("10:00 | ISM").impact == "medium"

    @pytest.mark.parametrize(
        "parser, value",
        [
            (parse_level, "PDH 2351"),
            (parse_level, "PDH @ high"),
            (parse_level, "PDH @ 2351 @ pivot"),
            (parse_zone, "2338"),
            (parse_zone, "low - high"),
            (parse_news, "08:30"),
            (parse_news, "08:30 | CPI | extreme"),
        ],
    )
    def test_session_parsers_reject(self, parser, value):
        with pytest.raises(click.BadParameter):
            parser(value)


class TestReviewCommands:
    @pytest.fixture
    def seeded(self, journal_env):
        journal_env.add_trade(Trade(direction="long", setup_type="FVG", outcome="win", pnl=100.0))
        journal_env.add_trade(Trade(direction="short", setup_type="OB", outcome="loss", pnl=-50.0, rules_followed=False))
        return journal_env

    def test_reflect(self, runner, seeded):
        result = runner.invoke(cli, [
            "reflect", "--trade", "1", "--pre", "calm", "--during", "anxious", "--improve", "Wait for the close",
        ])

        assert result.exit_code == 0, result.output
        assert "Saved reflection #1 on trade #1" in result.output
        reflection = seeded.get_reflections()[0]
        assert reflection.pre_emotion == "calm"
        assert reflection.during_emotion == "anxious"
        assert reflection.reflection_date == date.today()
        assert seeded.get_streak("reflections").current_count == 1

    def test_reflect_past_day_leaves_streak(self, runner, journal_env):
        result = runner.invoke(cli, ["reflect", "--date", "2024-06-03", "--notes", "Slow day"])

        assert result.exit_code == 0, result.output
        assert journal_env.get_reflections()[0].reflection_date == date(2024, 6, 3)
        assert journal_env.get_streak("reflections") is None

    def test_reflect_requires_content(self, runner, journal_env):
        result = runner.invoke(cli, ["reflect"])

        assert result.exit_code == 1
        assert "Nothing to record" in result.output

    def test_reflect_unknown_trade(self, runner, journal_env):
        result = runner.invoke(cli, ["reflect", "--trade", "99", "--pre", "calm"])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_reflect_rejects_unknown_emotion(self, runner, journal_env):
        result = runner.invoke(cli, ["reflect", "--pre", "euphoric"])

        assert result.exit_code == 2

    def test_reflections(self, runner, seeded):
        runner.invoke(cli, ["reflect", "--pre", "calm", "--post", "tilted"])

        result = runner.invoke(cli, ["reflections"])

        assert result.exit_code == 0, result.output
        assert "Emotion Tracker" in result.output
        assert "tilted" in result.output

    def test_reflections_empty(self, runner, journal_env):
        result = runner.invoke(cli, ["reflections"])

        assert result.exit_code == 0
        assert "No reflections yet" in result.output

    def test_check(self, runner, seeded):
        result = runner.invoke(cli, ["check", "1", "--chased", "--notes", "Entered before the close"])

        assert result.exit_code == 0, result.output
        check = seeded.get_rule_checks(trade_id=1)[0]
        assert check.waited_confirmation is False
        assert check.followed_rules is True
        assert "Checklist saved" in result.output
        assert seeded.get_trade(1).rules_followed is True

    def test_check_syncs_rules_followed(self, runner, seeded):
        result = runner.invoke(cli, ["check", "1", "--broke-rules"])

        assert result.exit_code == 0, result.output
        assert seeded.get_trade(1).rules_followed is False

    def test_check_all_passed(self, runner, seeded):
        result = runner.invoke(cli, ["check", "2"])

        assert result.exit_code == 0, result.output
        assert "passed every check" in result.output
        assert seeded.get_trade(2).rules_followed is True

    def test_check_unknown_trade(self, runner, journal_env):
        result = runner.invoke(cli, ["check", "99"])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_rules(self, runner, seeded):
        runner.invoke(cli, ["check", "1", "--emotional"])

        result = runner.invoke(cli, ["rules"])

        assert result.exit_code == 0, result.output
        assert "Adherence:      50.0%" in result.output
        assert "Checklist Pass Rates" in result.output

    def test_rules_without_checks(self, runner, seeded):
        result = runner.invoke(cli, ["rules"])

        assert result.exit_code == 0, result.output
        assert "No checklists answered yet" in result.output

    def test_rules_empty(self, runner, journal_env):
        result = runner.invoke(cli, ["rules"])

        assert result.exit_code == 0
        assert "No trades logged yet" in result.output


class TestMissedCommands:
    def test_add_and_list(self, runner, journal_env):
        added = runner.invoke(cli, [
            "missed", "add", "--direction", "long", "--setup", "FVG", "--pnl", "400", "--reason", "Hesitation",
        ])
        runner.invoke(cli, ["missed", "add", "--direction", "short", "--pnl", "100", "--reason", "Doubt"])

        listed = runner.invoke(cli, ["missed", "list"])

        assert added.exit_code == 0, added.output
        assert "Logged missed trade #1" in added.output
        assert listed.exit_code == 0, listed.output
        assert "+$500.00" in listed.output
        assert "+$250.00" in listed.output
        assert "Top Reason" in listed.output

    def test_list_filtered(self, runner, journal_env):
        runner.invoke(cli, ["missed", "add", "--direction", "long", "--pnl", "400", "--reason", "Hesitation"])
        runner.invoke(cli, ["missed", "add", "--direction", "short", "--pnl", "100", "--reason", "Doubt"])

        result = runner.invoke(cli, ["missed", "list", "--reason", "Doubt"])

        assert result.exit_code == 0, result.output
        assert "Missed Trades:  1" in result.output

    def test_list_empty(self, runner, journal_env):
        result = runner.invoke(cli, ["missed", "list"])

        assert result.exit_code == 0
        assert "No missed trades logged" in result.output

    def test_rejects_unknown_reason(self, runner, journal_env):
        result = runner.invoke(cli, ["missed", "add", "--direction", "long", "--reason", "Lunch"])

        assert result.exit_code == 2

    def test_delete(self, runner, journal_env):
        runner.invoke(cli, ["missed", "add", "--direction", "long"])

        first = runner.invoke(cli, ["missed", "delete", "1"])
        second = runner.invoke(cli, ["missed", "delete", "1"])

        assert first.exit_code == 0
        assert journal_env.get_potential_trades() == []
        assert second.exit_code == 1
        assert "not found" in second.output


class TestSessionCommands:
    def test_plan_missing(self, runner, journal_env):
        result = runner.invoke(cli, ["plan"])

        assert result.exit_code == 0
        assert "No session plan" in result.output

    def test_plan_saves_and_shows(self, runner, journal_env):
        result = runner.invoke(cli, [
            "plan",
            "--bias", "bullish",
            "--htf", "PDH @ 2351.4 @ resistance",
            "--ltf", "Asia low @ 2340",
            "--zone", "2338 - 2340.5 - sell-side",
            "--news", "08:30 | CPI | high",
            "--max-trades", "2",
        ])

        assert result.exit_code == 0, result.output
        assert "Saved session plan" in result.output
        assert "Key Levels" in result.output
        assert "0 / 2" in result.output

        plan = journal_env.get_session_plan(date.today())
        assert plan.market_bias == "bullish"
        assert plan.htf_levels[0].type == "resistance"
        assert plan.liquidity_zones[0].label == "sell-side"
        assert plan.news_events[0].impact == "high"
        assert journal_env.get_streak("session_plans").current_count == 1

    def test_plan_update_keeps_other_fields(self, runner, journal_env):
        runner.invoke(cli, ["plan", "--bias", "bearish", "--htf", "PDH @ 2351.4"])

        result = runner.invoke(cli, ["plan", "--notes", "Only A+ setups"])

        assert result.exit_code == 0, result.output
        plan = journal_env.get_session_plan(date.today())
        assert plan.market_bias == "bearish"
        assert len(plan.htf_levels) == 1
        assert plan.notes == "Only A+ setups"

    def test_plan_counts_trades_taken(self, runner, journal_env):
        journal_env.add_trade(Trade(direction="long", entry_time=datetime(2024, 6, 3, 9, 30)))
        journal_env.add_trade(Trade(direction="long", entry_time=datetime(2024, 6, 3, 10, 30)))

        result = runner.invoke(cli, ["plan", "--date", "2024-06-03", "--max-trades", "1"])

        assert result.exit_code == 0, result.output
        assert "2 / 1" in result.output
        assert journal_env.get_streak("session_plans") is None

    def test_plan_rejects_bad_level(self, runner, journal_env):
        result = runner.invoke(cli, ["plan", "--htf", "PDH 2351"])

        assert result.exit_code == 2

    def test_plan_rejects_zero_max_trades(self, runner, journal_env):
        result = runner.invoke(cli, ["plan", "--max-trades", "0"])

        assert result.exit_code == 1
        assert "Invalid session plan" in result.output

    def test_eod_requires_plan(self, runner, journal_env):
        result = runner.invoke(cli, ["eod"])

        assert result.exit_code == 1
        assert "Create a session plan first" in result.output

    def test_eod_updates_checklist(self, runner, journal_env):
        runner.invoke(cli, ["plan", "--bias", "neutral"])

        result = runner.invoke(cli, ["eod", "--journal", "--rating", "4"])

        assert result.exit_code == 0, result.output
        assert "4/5" in result.output
        plan = journal_env.get_session_plan(date.today())
        assert plan.eod_journal_done is True
        assert plan.eod_replay_done is False
        assert plan.eod_session_rating == 4

    def test_eod_complete(self, runner, journal_env):
        runner.invoke(cli, ["plan", "--bias", "neutral"])
        runner.invoke(cli, ["eod", "--journal", "--replay"])

        result = runner.invoke(cli, ["eod", "--playbook", "--rating", "5"])

        assert result.exit_code == 0, result.output
        assert "Review complete" in result.output

    def test_eod_rejects_bad_rating(self, runner, journal_env):
        runner.invoke(cli, ["plan", "--bias", "neutral"])

        result = runner.invoke(cli, ["eod", "--rating", "6"])

        assert result.exit_code == 2


class TestPlaybookCommands:
    def test_add_and_list(self, runner, journal_env):
        added = runner.invoke(cli, [
            "playbook", "add", "No trades into CPI", "--type", "avoid", "--evidence", "4, 9",
        ])
        listed = runner.invoke(cli, ["playbook", "list"])

        assert added.exit_code == 0, added.output
        assert "Added playbook entry #1" in added.output
        entry = journal_env.get_playbook()[0]
        assert entry.rule_type == "avoid"
        assert entry.evidence_trade_ids == (4, 9)
        assert listed.exit_code == 0, listed.output
        assert "No trades into CPI" in listed.output

    def test_add_rejects_bad_evidence(self, runner, journal_env):
        result = runner.invoke(cli, ["playbook", "add", "Trade the killzone", "--evidence", "four"])

        assert result.exit_code == 1
        assert journal_env.get_playbook() == []

    def test_retire(self, runner, journal_env):
        runner.invoke(cli, ["playbook", "add", "Fade the open"])

        retired = runner.invoke(cli, ["playbook", "retire", "1"])
        listed = runner.invoke(cli, ["playbook", "list"])
        listed_all = runner.invoke(cli, ["playbook", "list", "--all"])

        assert retired.exit_code == 0
        assert "No playbook entries yet" in listed.output
        assert "Fade the open" in listed_all.output

    def test_retire_missing(self, runner, journal_env):
        result = runner.invoke(cli, ["playbook", "retire", "99"])

        assert result.exit_code == 1
        assert "not found" in result.output
