"""
Tests service — merge + validation + gate par tier (evaluate_update / apply_update).
"""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import copy
from unittest.mock import patch

import pytest

from page_guard import (
    Tier, Document, PageUpdate, parse_document,
    evaluate_update, apply_update, merge_update, validate_document,
    ContentValidationError, BlockCountChanged,
)


# ── Helpers ───────────────────────────────────────────────────────────────

def heading(key="h1", text="Hello"):
    return {"_key": key, "_type": "heading-block", "data": {"text": text}}


def make_existing():
    return {
        "sections": [{"_key": "s1", "_type": "section", "blocks": [heading()]}],
        "seo": {"title": "Accueil"},
    }


def with_blocks(*blocks, key="s1"):
    return {"sections": [{"_key": key, "_type": "section", "blocks": list(blocks)}]}


def deep(levels):
    node = {"_key": "leaf", "_type": "text-block", "data": {"text": "x"}}
    for i in reversed(range(levels)):
        node = {"_key": f"c{i}", "_type": "stack-block", "data": {}, "blocks": [node]}
    return node


# ── Scénario de bout en bout ──────────────────────────────────────────────

class TestScenario:
    def test_content_editor_modifie_le_texte(self):
        decision = evaluate_update(make_existing(), with_blocks(heading(text="Hello World")), Tier.CONTENT_EDITOR)
        assert decision.accepted is True
        assert decision.violations == []
        assert decision.structural_check is True
        assert decision.document.sections[0].blocks[0].data["text"] == "Hello World"

    def test_content_editor_ajoute_un_bloc(self):
        b2 = {"_key": "b2", "_type": "text-block", "data": {"text": "new"}}
        decision = evaluate_update(make_existing(), with_blocks(heading(text="Hello World"), b2), Tier.CONTENT_EDITOR)
        assert decision.accepted is False
        assert decision.document is None
        [v] = decision.violations
        assert isinstance(v, BlockCountChanged)
        assert v.section_key == "s1"

    def test_builder_ajoute_un_bloc(self):
        b2 = {"_key": "b2", "_type": "text-block", "data": {"text": "new"}}
        decision = evaluate_update(make_existing(), with_blocks(heading(text="Hello World"), b2), "BUILDER")
        assert decision.accepted is True
        assert decision.tier is Tier.BUILDER
        assert [b.key for b in decision.document.sections[0].blocks] == ["h1", "b2"]


# ── Gate ──────────────────────────────────────────────────────────────────

class TestGate:
    def test_builder_ne_calcule_pas_de_diff(self):
        with patch("page_guard.service.structural_violations") as diff:
            decision = evaluate_update(make_existing(), with_blocks(), Tier.BUILDER)
        diff.assert_not_called()
        assert decision.accepted is True
        assert decision.structural_check is False

    def test_content_editor_calcule_le_diff(self):
        with patch("page_guard.service.structural_violations", return_value=[]) as diff:
            evaluate_update(make_existing(), make_existing(), Tier.CONTENT_EDITOR)
        diff.assert_called_once()

    def test_permutation_refusee_puis_acceptee(self):
        existing = with_blocks(heading("h1"), heading("h2"))
        proposed = with_blocks(heading("h2"), heading("h1"))
        refused = evaluate_update(existing, proposed, Tier.CONTENT_EDITOR)
        assert [v.kind for v in refused.violations] == ["BlockReordered"]
        accepted = evaluate_update(existing, proposed, Tier.BUILDER)
        assert accepted.accepted is True
        assert accepted.structural_check is False

    def test_update_sans_sections(self):
        decision = evaluate_update(make_existing(), {"seo": {"title": "Nouveau"}}, Tier.CONTENT_EDITOR)
        assert decision.accepted is True
        assert decision.structural_check is False
        assert decision.document.sections[0].blocks[0].key == "h1"
        assert decision.document.model_extra["seo"] == {"title": "Nouveau"}

    def test_existant_absent_content_editor(self):
        decision = evaluate_update(None, with_blocks(heading()), Tier.CONTENT_EDITOR)
        assert decision.accepted is False
        assert decision.violations[0].kind == "SectionCountChanged"

    def test_existant_absent_builder(self):
        assert evaluate_update(None, with_blocks(heading()), Tier.BUILDER).accepted is True

    def test_collect_all(self):
        proposed = with_blocks(heading(key="h2"), key="s1")
        proposed["sections"].append({"_key": "s2", "_type": "section", "blocks": []})
        existing = make_existing()
        existing["sections"].append({"_key": "s2", "_type": "section", "blocks": [heading(key="h3")]})
        decision = evaluate_update(existing, proposed, Tier.CONTENT_EDITOR, collect_all=True)
        assert [v.kind for v in decision.violations] == ["BlockReordered", "BlockCountChanged"]

    def test_tier_inconnu(self):
        with pytest.raises(ValueError):
            evaluate_update(make_existing(), make_existing(), "ADMIN")


# ── Validation tous tiers ─────────────────────────────────────────────────

class TestValidation:
    @pytest.mark.parametrize("tier", list(Tier))
    def test_grammaire_refusee_pour_tous(self, tier):
        decision = evaluate_update(make_existing(), with_blocks(heading(text="")), tier)
        assert decision.accepted is False
        assert decision.violations[0].kind == "GrammarViolation"

    def test_doublon_refuse_pour_builder(self):
        decision = evaluate_update(make_existing(), with_blocks(heading(), heading()), Tier.BUILDER)
        assert [v.kind for v in decision.violations] == ["DuplicateKey"]

    def test_profondeur_refusee_pour_builder(self):
        decision = evaluate_update(make_existing(), with_blocks(deep(3)), Tier.BUILDER)
        [v] = decision.violations
        assert v.kind == "NestingDepthExceeded"
        assert v.observed == 5

    def test_fail_fast(self):
        doc = with_blocks(heading(text=""), heading(text=""))
        assert [v.kind for v in validate_document(doc)] == ["GrammarViolation", "GrammarViolation"]
        kinds = [v.kind for v in validate_document(doc, fail_fast=False)]
        assert kinds == ["GrammarViolation", "GrammarViolation", "DuplicateKey"]

    def test_enveloppe_invalide(self):
        decision = evaluate_update(make_existing(), {"sections": "nope"}, Tier.BUILDER)
        assert decision.accepted is False
        assert decision.violations[0].field == "sections"

    def test_document_valide(self):
        assert validate_document(make_existing()) == []


# ── Snapshot existant illisible ───────────────────────────────────────────

def make_broken_existing():
    return {"sections": [{"_type": "section", "blocks": []}], "seo": {"title": "Accueil"}}


class TestSnapshotIllisible:
    def test_builder_repare_le_document(self):
        decision = evaluate_update(make_broken_existing(), with_blocks(heading()), Tier.BUILDER)
        assert decision.accepted is True
        assert decision.document.sections[0].key == "s1"
        assert decision.document.model_extra["seo"] == {"title": "Accueil"}

    def test_builder_vide_les_sections(self):
        decision = evaluate_update({"sections": [{"blocks": []}]}, {"sections": []}, Tier.BUILDER)
        assert decision.accepted is True
        assert decision.document.sections == []

    def test_content_editor_erreur_attribuee_au_snapshot(self):
        decision = evaluate_update(make_broken_existing(), with_blocks(heading()), Tier.CONTENT_EDITOR)
        assert decision.accepted is False
        [v] = decision.violations
        assert v.field == "existing.sections.0._key"
        assert v.message.endswith("existing.sections.0._key: Field required")

    def test_builder_sans_sections_ne_peut_pas_fusionner(self):
        decision = evaluate_update(make_broken_existing(), {"seo": {}}, Tier.BUILDER)
        assert decision.accepted is False
        assert decision.violations[0].field.startswith("existing.")

    def test_erreur_de_la_proposition_non_prefixee(self):
        decision = evaluate_update(make_existing(), {"sections": [{"blocks": []}]}, Tier.BUILDER)
        assert decision.violations[0].field == "sections.0._key"


# ── Merge ─────────────────────────────────────────────────────────────────

class TestMerge:
    def test_existant_non_mute(self):
        raw = make_existing()
        before = copy.deepcopy(raw)
        stored = parse_document(raw)
        evaluate_update(stored, with_blocks(heading(text="Changed")), Tier.CONTENT_EDITOR)
        assert raw == before
        assert stored.sections[0].blocks[0].data["text"] == "Hello"

    def test_sections_absentes_conservees(self):
        merged = merge_update(parse_document(make_existing()), PageUpdate.model_validate({"seo": {}}))
        assert merged.sections[0].key == "s1"

    def test_champs_annexes_conserves(self):
        merged = merge_update(parse_document(make_existing()), PageUpdate.model_validate(with_blocks()))
        assert merged.sections[0].blocks == []
        assert merged.model_extra["seo"] == {"title": "Accueil"}

    def test_document_complet_comme_update(self):
        doc = parse_document(make_existing())
        assert evaluate_update(doc, doc, Tier.CONTENT_EDITOR).accepted is True


# ── apply_update / sérialisation ──────────────────────────────────────────

class TestApplyUpdate:
    def test_retourne_le_document(self):
        doc = apply_update(make_existing(), with_blocks(heading(text="Hi")), Tier.CONTENT_EDITOR)
        assert isinstance(doc, Document)
        assert doc.to_wire()["sections"][0]["blocks"][0]["data"] == {"text": "Hi"}

    def test_leve_content_validation_error(self):
        with pytest.raises(ContentValidationError) as exc:
            apply_update(make_existing(), with_blocks(), Tier.CONTENT_EDITOR)
        assert exc.value.categories == ["structure"]
        assert "Content Editor tier cannot add or remove blocks" in str(exc.value)
        assert isinstance(exc.value, ValueError)

    def test_decision_camelcase(self):
        decision = evaluate_update(make_existing(), with_blocks(), Tier.CONTENT_EDITOR)
        dumped = decision.model_dump(by_alias=True, mode="json")
        assert dumped["structuralCheck"] is True
        assert dumped["tier"] == "CONTENT_EDITOR"
        assert dumped["violations"][0]["sectionKey"] == "s1"
