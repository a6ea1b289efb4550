"""
Tests for AI response parsing and batch classification.
"""
from unittest.mock import MagicMock

import pytest

from prospector.ai.classifier import AIClassifier, parse_verdicts, strip_formatting
from prospector.errors import AIResponseParseError
from prospector.models.listing import Listing
from prospector.models.classification import Verdict


@pytest.fixture
def listings() -> list[Listing]:
    return [
        Listing(place_id="p0", title="Motosierras Durango", type="Tienda de herramientas"),
        Listing(place_id="p1", title="Licuadoras Express"),
        Listing(title="Sin identificador"),
    ]


class TestStripFormatting:

    def test_plain_text_unchanged(self):
        assert strip_formatting('  [{"idx":0}] ') == '[{"idx":0}]'

    def test_json_fence_removed(self):
        assert strip_formatting('```json\n[{"idx":0}]\n```') == '[{"idx":0}]'

    def test_bare_fence_removed(self):
        assert strip_formatting('```\n[]\n```') == "[]"


class TestParseVerdicts:
    """Tests for parse_verdicts."""

    def test_maps_idx_to_keys(self, listings):
        text = (
            '[{"idx":0,"verdict":"prospect","reason":"Distribuidor forestal"},'
            '{"idx":1,"verdict":"irrelevant","reason":"Cocina"}]'
        )
        verdicts = parse_verdicts(text, listings)

        assert set(verdicts) == {"p0", "p1"}
        assert verdicts["p0"].verdict == Verdict.PROSPECT
        assert verdicts["p0"].reason == "Distribuidor forestal"
        assert verdicts["p1"].verdict == Verdict.IRRELEVANT

    def test_fenced_response(self, listings):
        text = '```json\n[{"idx":0,"verdict":"uncertain","reason":"Ferretería"}]\n```'
        verdicts = parse_verdicts(text, listings)
        assert verdicts["p0"].verdict == Verdict.UNCERTAIN

    def test_missing_reason_defaults_to_empty(self, listings):
        verdicts = parse_verdicts('[{"idx":1,"verdict":"irrelevant"}]', listings)
        assert verdicts["p1"].reason == ""

    def test_unknown_position_skipped(self, listings):
        text = '[{"idx":7,"verdict":"prospect"},{"idx":-1,"verdict":"prospect"},{"idx":0,"verdict":"prospect"}]'
        verdicts = parse_verdicts(text, listings)
        assert list(verdicts) == ["p0"]

    def test_listing_without_key_skipped(self, listings):
        verdicts = parse_verdicts('[{"idx":2,"verdict":"prospect"}]', listings)
        assert verdicts == {}

    @pytest.mark.parametrize("text", [
        "no es json",
        '{"idx":0,"verdict":"prospect"}',
        '[{"idx":0,"verdict":"maybe"}]',
        '[{"verdict":"prospect"}]',
    ])
    def test_malformed_raises(self, listings, text):
        with pytest.raises(AIResponseParseError) as exc_info:
            parse_verdicts(text, listings)
        assert exc_info.value.raw == text

    def test_parse_error_is_value_error(self, listings):
        with pytest.raises(ValueError):
            parse_verdicts("[", listings)


class TestAIClassifier:
    """Tests for AIClassifier with a mocked LLM."""

    @pytest.fixture
    def llm(self):
        llm = MagicMock()
        llm.complete.return_value = '[{"idx":0,"verdict":"prospect","reason":"Equipo forestal"}]'
        return llm

    def test_classify(self, llm, listings, chainsaw_niche):
        classifier = AIClassifier(llm_client=llm, max_batch_size=20)
        verdicts = classifier.classify(listings, chainsaw_niche)

        assert verdicts["p0"].verdict == Verdict.PROSPECT
        llm.complete.assert_called_once()

    def test_prompt_lists_niche_and_businesses(self, llm, listings, chainsaw_niche):
        classifier = AIClassifier(llm_client=llm, max_batch_size=20)
        prompt = classifier.build_prompt(listings, chainsaw_niche)

        assert "Nombre: Refacciones de motosierra" in prompt
        assert '[0] "Motosierras Durango" | Tipo: Tienda de herramientas' in prompt
        assert '[1] "Licuadoras Express"' in prompt
        assert '"idx":0' in prompt

    def test_batch_truncated(self, llm, chainsaw_niche):
        many = [Listing(place_id=f"p{i}", title=f"Negocio {i}") for i in range(30)]
        classifier = AIClassifier(llm_client=llm, max_batch_size=20)
        classifier.classify(many, chainsaw_niche)

        prompt = llm.complete.call_args[0][0]
        assert '[19] "Negocio 19"' in prompt
        assert '[20] "Negocio 20"' not in prompt

    def test_empty_batch_rejected(self, llm, chainsaw_niche):
        classifier = AIClassifier(llm_client=llm, max_batch_size=20)
        with pytest.raises(ValueError):
            classifier.classify([], chainsaw_niche)
        llm.complete.assert_not_called()

    def test_malformed_response_propagates(self, llm, listings, chainsaw_niche):
        llm.complete.return_value = "Lo siento, no puedo ayudar."
        classifier = AIClassifier(llm_client=llm, max_batch_size=20)
        with pytest.raises(AIResponseParseError):
            classifier.classify(listings, chainsaw_niche)
