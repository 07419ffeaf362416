"""Tests for document-level content classification."""

from patchlog.ingest.document import Block
from patchlog.processor.content_classifier import classify_content, is_candidate_line, iter_lines


class TestIsCandidateLine:
    """Tests for the line pre-filter."""

    def test_accepts_bullets_and_text(self):
        """Test bullet and alphanumeric starts."""
        assert is_candidate_line("- Abrams: Something") is True
        assert is_candidate_line("• Something") is True
        assert is_candidate_line("7 heroes changed") is True

    def test_rejects_bracket_heading(self):
        """Test that '[General]'-style headings are dropped."""
        assert is_candidate_line("[General]") is False
        assert is_candidate_line("  [ Hero Changes ]  ") is False

    def test_rejects_symbol_start_and_blank(self):
        """Test that lines starting with symbols are dropped."""
        assert is_candidate_line("(see below)") is False
        assert is_candidate_line("") is False
        assert is_candidate_line("   ") is False


class TestIterLines:
    """Tests for iter_lines."""

    def test_list_items_and_line_breaks(self):
        """Test that list items and embedded breaks become separate lines."""
        blocks = [
            Block.from_text("Intro line\n- Abrams: One\n\n"),
            Block.from_items(["Bebop: Two", "  Haze: Three  "]),
        ]

        assert list(iter_lines(blocks)) == [
            "Intro line", "- Abrams: One", "Bebop: Two", "Haze: Three",
        ]


class TestClassifyContent:
    """Tests for classify_content."""

    def test_hero_scenario(self, registry):
        """Test a hero line whose numbers carry units."""
        content = classify_content(
            [Block.from_text("Bebop: Hook cooldown reduced from 20s to 18s")], registry
        )

        assert content.to_dict()["heroes"]["Bebop"] == {
            "id": 15,
            "notes": [{"text": "Hook cooldown reduced from 20s to 18s", "patterns": []}],
            "abilities": [],
        }

    def test_item_scenario(self, registry):
        """Test a bulleted item line with a value change."""
        content = classify_content(
            [Block.from_items(["- Superior Stamina: Cost reduced from 6200 to 5800"])], registry
        )

        note = content.items["Superior Stamina"].notes[0]
        assert content.items["Superior Stamina"].id == 101
        assert note.text == "Cost reduced from 6200 to 5800"
        assert [(p.text, p.start, p.end) for p in note.patterns] == [("6200 to 5800", 18, 30)]

    def test_full_document(self, registry):
        """Test routing of every owner kind in document order."""
        blocks = [
            Block.from_text("[General]"),
            Block.from_text("- Souls from troopers increased from 40 to 45"),
            Block.from_text("[Heroes]"),
            Block.from_items([
                "Abrams: Base health increased",
                "Haze: Bullet damage reduced",
                "abrams: Shoulder Charge cooldown reduced",
            ]),
            Block.from_items(["Metal Skin: Duration increased from 3 to 3.5"]),
            Block.from_text("Trooper Lanes: Spawn faster"),
            Block.from_text("(unrelated aside)"),
        ]

        content = classify_content(blocks, registry)

        assert [n.text for n in content.notes] == ["Souls from troopers increased from 40 to 45"]
        assert list(content.heroes) == ["Abrams", "Haze"]
        assert [n.text for n in content.heroes["Abrams"].notes] == [
            "Base health increased",
            "Shoulder Charge cooldown reduced",
        ]
        assert content.heroes["Abrams"].id == 6
        assert content.items["Metal Skin"].notes[0].patterns[0].text == "3 to 3.5"
        assert [n.text for n in content.abilities["Trooper Lanes"].notes] == ["Spawn faster"]

    def test_hero_heading_creates_record_without_note(self, registry):
        """Test that 'Hero:' alone opens a section but adds no empty note."""
        content = classify_content([Block.from_text("Seven:")], registry)

        assert content.heroes["Seven"].id == 2
        assert content.heroes["Seven"].notes == []

    def test_unknown_labels_are_never_general(self, registry):
        """Test that every unmatched labelled line lands under its label."""
        blocks = [Block.from_items([
            "Changes to the trooper waves: spawn faster",
            "Souls, troopers: tuned",
            "Misc:",
        ])]

        content = classify_content(blocks, registry)

        assert content.notes == []
        assert list(content.abilities) == ["Changes to the trooper waves", "Souls, troopers", "Misc"]
        assert [n.text for n in content.abilities["Souls, troopers"].notes] == ["tuned"]
        assert content.abilities["Misc"].notes == []

    def test_abilities_are_not_extracted_here(self, registry):
        """Test that ability splitting is left to the extractor."""
        content = classify_content([Block.from_text("Abrams: Siphon Life: Radius reduced")], registry)

        assert content.heroes["Abrams"].abilities == []
        assert content.heroes["Abrams"].notes[0].text == "Siphon Life: Radius reduced"

    def test_empty_document(self, registry):
        """Test that no blocks yields empty content."""
        content = classify_content([], registry)

        assert content.to_dict() == {"notes": [], "heroes": {}, "items": {}, "abilities": {}}
