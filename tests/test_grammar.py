"""
Tests grammaire — conformité payload / tag, arité des conteneurs, enfants interdits.
"""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from page_guard import parse_document, check_block_payload, check_grammar, validate_document
from page_guard.blocks import BLOCK_REGISTRY, CONTAINER_TAGS, CONTENT_TAGS, ColumnsBlock


# ── Helpers ───────────────────────────────────────────────────────────────

def blk(key, tag, children=None, **data):
    b = {"_key": key, "_type": tag, "data": data}
    if children is not None:
        b["blocks"] = children
    return b


def doc(*blocks, key="s1"):
    return parse_document({"sections": [{"_key": key, "_type": "section", "blocks": list(blocks)}]})


def only(violations):
    assert len(violations) == 1, violations
    return violations[0]


# ── Catalogue fermé ───────────────────────────────────────────────────────

class TestCatalogue:
    def test_24_variantes(self):
        assert len(BLOCK_REGISTRY) == 24
        assert CONTAINER_TAGS == {"grid-block", "flex-block", "stack-block", "container-block", "columns-block"}
        assert len(CONTENT_TAGS) == 19

    def test_exports_et_registre(self):
        import page_guard.blocks as blocks
        assert all(hasattr(blocks, name) for name in blocks.__all__)
        assert {t for t in BLOCK_REGISTRY if blocks.is_container_tag(t)} == CONTAINER_TAGS
        assert not blocks.is_container_tag("hero-block")

    def test_tag_inconnu_rejete(self):
        v = only(check_block_payload("hero-block", {"title": "x"}, key="b1"))
        assert v.field == "_type"
        assert v.code == "union_tag_invalid"
        assert v.key == "b1"
        assert "hero-block" in v.reason


# ── Heading ───────────────────────────────────────────────────────────────

class TestHeading:
    def test_conforme(self):
        assert check_block_payload("heading-block", {"text": "Hello", "level": "h1"}) == []

    def test_level_par_defaut(self):
        assert check_block_payload("heading-block", {"text": "Hello"}) == []

    def test_texte_manquant(self):
        v = only(check_block_payload("heading-block", {"level": "h2"}, key="h1"))
        assert v.field == "text"
        assert v.code == "missing"
        assert v.tag == "heading-block"

    def test_texte_vide(self):
        v = only(check_block_payload("heading-block", {"text": "", "level": "h2"}))
        assert v.field == "text"
        assert v.code == "string_too_short"

    def test_level_hors_enum(self):
        v = only(check_block_payload("heading-block", {"text": "T", "level": "h7"}))
        assert v.field == "level"
        assert v.code == "literal_error"

    def test_mauvais_type_primitif(self):
        v = only(check_block_payload("heading-block", {"text": 123}))
        assert v.field == "text"
        assert v.code == "string_type"

    def test_champs_inconnus_toleres(self):
        assert check_block_payload("heading-block", {"text": "T", "animation": {"type": "fade"}}) == []


# ── Autres variantes ──────────────────────────────────────────────────────

class TestVariantes:
    def test_button_cle_camelcase(self):
        v = only(check_block_payload("button-block", {"text": "Go", "href": "#", "fullWidth": "yes"}))
        assert v.field == "fullWidth"
        assert v.code == "bool_type"

    def test_list_item_sans_texte(self):
        v = only(check_block_payload("list-block", {"items": [{"text": "a"}, {}]}))
        assert v.field == "items.1.text"

    def test_map_latitude_hors_bornes(self):
        v = only(check_block_payload("map-block", {"center": {"lat": 100, "lng": 2.35}}))
        assert v.field == "center.lat"

    def test_map_latitude_chaine_refusee(self):
        v = only(check_block_payload("map-block", {"center": {"lat": "40.7", "lng": -74}}))
        assert v.field == "center.lat"
        assert v.code == "float_type"

    def test_map_latitude_booleen_refuse(self):
        violations = check_block_payload("map-block", {"center": {"lat": True, "lng": False}})
        assert {v.field for v in violations} == {"center.lat", "center.lng"}

    def test_map_coordonnees_entieres(self):
        assert check_block_payload("map-block", {"center": {"lat": 48, "lng": 2.35}}) == []

    def test_tabs_default_tab_hors_limites(self):
        v = only(check_block_payload("tabs-block", {
            "tabs": [{"label": "A", "content": "a"}, {"label": "B", "content": "b"}],
            "defaultTab": 5,
        }))
        assert v.field == "data"
        assert "defaultTab" in v.reason

    def test_tabs_vide(self):
        v = only(check_block_payload("tabs-block", {"tabs": []}))
        assert v.field == "tabs"

    def test_spacer_height_requis(self):
        v = only(check_block_payload("spacer-block", {}))
        assert v.field == "height"
        assert v.code == "missing"

    def test_divider_tout_optionnel(self):
        assert check_block_payload("divider-block", {}) == []

    def test_plusieurs_erreurs_remontees(self):
        violations = check_block_payload("button-block", {"variant": "rainbow"})
        assert {v.field for v in violations} == {"text", "href", "variant"}


# ── Enfants ───────────────────────────────────────────────────────────────

class TestEnfants:
    def test_contenu_avec_enfants_invalide(self):
        v = only(check_block_payload("text-block", {"text": "t"}, key="t1", children=[{"_key": "x"}]))
        assert v.field == "blocks"
        assert v.reason == "content blocks cannot carry children"

    def test_contenu_avec_liste_vide_invalide(self):
        v = only(check_block_payload("text-block", {"text": "t"}, children=[]))
        assert v.field == "blocks"

    @pytest.mark.parametrize("tag", ["grid-block", "flex-block", "stack-block", "container-block"])
    def test_conteneurs_nombre_libre(self, tag):
        assert check_block_payload(tag, {}, children=[]) == []
        assert check_block_payload(tag, {}, children=[object()] * 7) == []
        assert check_block_payload(tag, {}) == []


# ── Arité columns ─────────────────────────────────────────────────────────

class TestColumnsArity:
    def test_count_3_avec_2_enfants_echoue(self):
        v = only(check_block_payload("columns-block", {"count": 3}, key="c1", children=["a", "b"]))
        assert v.field == "blocks"
        assert "3" in v.reason and "2" in v.reason

    def test_count_3_avec_3_enfants_passe(self):
        assert check_block_payload("columns-block", {"count": 3}, children=["a", "b", "c"]) == []

    def test_count_string_editeur(self):
        assert check_block_payload("columns-block", {"count": "2"}, children=["a", "b"]) == []

    def test_count_hors_enum(self):
        v = only(check_block_payload("columns-block", {"count": 4}, children=["a"] * 4))
        assert v.field == "count"

    def test_sans_enfants(self):
        v = only(check_block_payload("columns-block", {"count": 2}))
        assert v.field == "blocks"

    def test_expected_child_count(self):
        block = ColumnsBlock.model_validate({"_key": "c", "data": {"count": "3"}, "blocks": [1, 2, 3]})
        assert block.expected_child_count() == 3


# ── Walk document ─────────────────────────────────────────────────────────

class TestCheckGrammar:
    def test_document_conforme(self):
        d = doc(
            blk("h1", "heading-block", text="Hello"),
            blk("g1", "grid-block", [blk("t1", "text-block", text="a"), blk("t2", "text-block", text="b")], columns="2"),
        )
        assert check_grammar(d) == []

    def test_erreur_imbriquee_rattachee_a_la_cle_enfant(self):
        d = doc(blk("g1", "grid-block", [
            blk("t1", "text-block", text="ok"),
            blk("i1", "image-block", src="/a.png"),
        ]))
        v = only(check_grammar(d))
        assert v.key == "i1"
        assert v.field == "alt"

    def test_ordre_document(self):
        d = doc(
            blk("a", "quote-block"),
            blk("g", "stack-block", [blk("b", "icon-block", icon="")]),
            blk("c", "audio-block"),
        )
        assert [v.key for v in check_grammar(d)] == ["a", "b", "c"]

    def test_message_lisible(self):
        v = only(check_grammar(doc(blk("h1", "heading-block"))))
        assert v.message.startswith("Invalid heading-block 'h1': text")


# ── Enveloppe ────────────────────────────────────────────────────────────

class TestEnveloppe:
    def test_cle_manquante_rapportee_sans_lever(self):
        raw = {"sections": [{"_key": "s1", "_type": "section", "blocks": [{"_type": "text-block", "data": {}}]}]}
        v = only(validate_document(raw))
        assert v.kind == "GrammarViolation"
        assert v.key is None
        assert v.field == "sections.0.blocks.0._key"

    def test_cle_de_section_vide(self):
        raw = {"sections": [{"_key": "", "_type": "section", "blocks": []}]}
        v = only(validate_document(raw))
        assert v.field == "sections.0._key"
        assert v.code == "string_too_short"

    def test_type_section_invalide(self):
        raw = {"sections": [{"_key": "s1", "_type": "hero", "blocks": []}]}
        v = only(validate_document(raw))
        assert v.field == "sections.0._type"
