"""
Test Response Generator
=======================

Unit tests for keyword lookup and default response selection.
"""

import random
import pytest
from collections import Counter
from pathlib import Path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from responder.generator import ResponseGenerator
from core.config import ResponderConfig
from core.exceptions import (
    ConfigError,
    NoDefaultResponsesError,
    ResourceNotFoundError,
    ResourceUnreadableError,
)


DEFAULTS = "That sounds odd.\n\nTell me more...\n\nHave you read the manual?\n"


@pytest.fixture
def resources(tmp_path):
    """Write a keyword file and a default file and return a config for them."""
    responses = tmp_path / "responses.txt"
    responses.write_text(
        "yes, yeah\n\nI agree.\n\nno\n\nDisagree.\n\n"
        "crash, crashes, CRASHED\nIt never crashes on our system.\n",
        encoding="utf-8",
    )
    defaults = tmp_path / "default.txt"
    defaults.write_text(DEFAULTS, encoding="ascii")

    return ResponderConfig(
        responses_file=str(responses),
        defaults_file=str(defaults),
        seed=1234,
    )


@pytest.fixture
def generator(resources):
    return ResponseGenerator(resources)


class TestConstruction:
    """Tests for building the generator from files."""

    def test_tables_loaded(self, generator):
        assert generator.responses["yeah"] == "I agree."
        assert generator.default_responses == (
            "That sounds odd.",
            "Tell me more...",
            "Have you read the manual?",
        )
        assert generator.load_errors == ()

    def test_tables_read_only(self, generator):
        with pytest.raises(TypeError):
            generator.responses["new"] = "value"

    def test_missing_files_do_not_fail(self, tmp_path):
        config = ResponderConfig(
            responses_file=str(tmp_path / "nope.txt"),
            defaults_file=str(tmp_path / "nada.txt"),
        )

        generator = ResponseGenerator(config)

        assert dict(generator.responses) == {}
        assert generator.default_responses == ()
        assert len(generator.load_errors) == 2
        assert all(isinstance(e, ResourceNotFoundError) for e in generator.load_errors)

    def test_unreadable_defaults_keep_keywords(self, resources, tmp_path):
        bad = tmp_path / "bad.txt"
        bad.write_bytes("Ça ne marche pas.\n".encode("utf-8"))
        resources.defaults_file = str(bad)

        generator = ResponseGenerator(resources)

        assert generator.generate_response({"no"}) == "Disagree."
        assert generator.default_responses == ()
        assert isinstance(generator.load_errors[0], ResourceUnreadableError)

    def test_invalid_config_rejected(self, resources):
        resources.responses_encoding = "no-such-codec"

        with pytest.raises(ConfigError):
            ResponseGenerator(resources)

    def test_wrongly_typed_config_rejected(self, resources):
        resources.fallback_response = 123

        with pytest.raises(ConfigError):
            ResponseGenerator(resources)

    def test_identical_content_identical_lookups(self, resources):
        first = ResponseGenerator(resources)
        second = ResponseGenerator(resources)

        assert dict(first.responses) == dict(second.responses)
        for word in ("yes", "yeah", "no", "crash", "crashed", "printer"):
            assert first.lookup({word}) == second.lookup({word})


class TestSampleResources:
    """Tests for the resources shipped at the repository root."""

    def test_samples_load_cleanly(self):
        root = Path(__file__).parent.parent
        config = ResponderConfig(
            responses_file=str(root / "responses.txt"),
            defaults_file=str(root / "default.txt"),
        )

        generator = ResponseGenerator(config)

        assert generator.load_errors == ()
        assert "crash" in generator.responses
        assert len(generator.default_responses) > 1


class TestGenerateResponse:
    """Tests for response generation."""

    def test_keyword_lookup(self, generator):
        assert generator.generate_response({"yeah"}) == "I agree."
        assert generator.generate_response({"no"}) == "Disagree."

    def test_case_insensitive(self, generator):
        assert generator.generate_response({"YES"}) == generator.generate_response({"yes"})
        assert generator.generate_response({"Crashed"}) == "It never crashes on our system."

    def test_fan_in(self, generator):
        responses = {generator.generate_response({w}) for w in ("crash", "crashes", "crashed")}

        assert responses == {"It never crashes on our system."}

    def test_match_among_other_words(self, generator):
        words = {"my", "program", "crashes", "daily"}

        assert generator.generate_response(words) == "It never crashes on our system."

    def test_several_matches_return_one_of_them(self, generator):
        """Test no precedence is assumed between matching words."""
        response = generator.generate_response({"yes", "no", "crash"})

        assert response in {"I agree.", "Disagree.", "It never crashes on our system."}

    def test_accepts_any_iterable(self, generator):
        assert generator.generate_response(["printer", "yes"]) == "I agree."

    def test_no_match_returns_default(self, generator):
        defaults = set(generator.default_responses)

        for _ in range(50):
            assert generator.generate_response({"printer", "jammed"}) in defaults

    def test_empty_word_set_returns_default(self, generator):
        assert generator.generate_response(set()) in generator.default_responses

    def test_every_default_reachable(self, generator):
        counts = Counter(generator.generate_response({"unknown"}) for _ in range(300))

        assert set(counts) == set(generator.default_responses)
        assert all(count > 0 for count in counts.values())

    def test_seeded_picks_repeatable(self, resources):
        first = ResponseGenerator(resources)
        second = ResponseGenerator(resources)

        picks = [first.generate_response({"unknown"}) for _ in range(20)]

        assert picks == [second.generate_response({"unknown"}) for _ in range(20)]

    def test_match_does_not_consume_random_draw(self):
        rng = random.Random(99)
        generator = ResponseGenerator.from_tables({"yes": "I agree."}, ["a", "b", "c"], rng=rng)
        state = rng.getstate()

        generator.generate_response({"yes"})

        assert rng.getstate() == state


class TestEmptyDefaults:
    """Tests for the empty default list policy."""

    def test_fallback_policy(self):
        config = ResponderConfig(fallback_response="Please call us.")
        generator = ResponseGenerator.from_tables({"yes": "I agree."}, [], config=config)

        assert generator.generate_response({"unknown"}) == "Please call us."
        assert generator.generate_response({"yes"}) == "I agree."

    def test_raise_policy(self):
        config = ResponderConfig(on_empty_defaults="raise")
        generator = ResponseGenerator.from_tables({"yes": "I agree."}, [], config=config)

        assert generator.generate_response({"yes"}) == "I agree."
        with pytest.raises(NoDefaultResponsesError):
            generator.generate_response({"unknown"})


class TestFromTables:
    """Tests for in-memory construction."""

    def test_keys_lowercased(self):
        generator = ResponseGenerator.from_tables({"Linux": "We support Linux."}, ["Hmm."])

        assert generator.generate_response({"LINUX"}) == "We support Linux."

    def test_defaults_order_kept(self):
        generator = ResponseGenerator.from_tables({}, ["b", "a", "c"])

        assert generator.default_responses == ("b", "a", "c")

    def test_blank_defaults_dropped(self):
        generator = ResponseGenerator.from_tables({}, ["", "  Tell me more...  ", "   \n "])

        assert generator.default_responses == ("Tell me more...",)

    def test_only_blank_defaults_use_fallback(self):
        config = ResponderConfig(fallback_response="Please call us.")
        generator = ResponseGenerator.from_tables({}, ["", "  "], config=config)

        assert generator.default_responses == ()
        assert generator.generate_response({"unknown"}) == "Please call us."

    def test_table_normalized(self):
        generator = ResponseGenerator.from_tables(
            {"  Crash ": "  It never crashes.\n", "": "nobody", "empty": "   "}, ["Hmm."]
        )

        assert dict(generator.responses) == {"crash": "It never crashes."}


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
