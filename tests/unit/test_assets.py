"""Tests for the asset registry and result board"""

import re

from core.models.assets import (
    AssetKind,
    AssetRegistry,
    GeneratedAsset,
    extension_for,
    make_filename,
    to_data_url,
)
from core.models.results import CardState, ResultBoard, ResultCard


def _asset(filename, kind=AssetKind.IMAGE, data=b"x"):
    return GeneratedAsset(url="data:image/jpeg;base64,eA==", filename=filename, kind=kind, data=data)


# ============================================================
# Filenames
# ============================================================

class TestFilenames:

    def test_make_filename_shape(self):
        name = make_filename("image", "jpeg")
        assert re.fullmatch(r"image-[0-9a-f]{12}\.jpeg", name)

    def test_filenames_do_not_collide(self):
        names = {make_filename("video", "mp4") for _ in range(200)}
        assert len(names) == 200

    def test_extension_for(self):
        assert extension_for("image/PNG") == "png"
        assert extension_for("audio/wav") == "wav"
        assert extension_for("application/x-unknown", "png") == "png"

    def test_to_data_url(self):
        assert to_data_url(b"hi", "audio/wav") == "data:audio/wav;base64,aGk="


# ============================================================
# Registry
# ============================================================

class TestAssetRegistry:

    def test_remove_deletes_exactly_one(self):
        registry = AssetRegistry()
        registry.add(_asset("a.jpeg"))
        registry.add(_asset("b.jpeg"))
        registry.add(_asset("a.jpeg"))

        assert registry.remove("a.jpeg")
        assert [a.filename for a in registry] == ["b.jpeg", "a.jpeg"]

    def test_remove_unknown_is_noop(self):
        registry = AssetRegistry()
        registry.add(_asset("a.jpeg"))
        assert registry.remove("a.jpeg")
        assert not registry.remove("a.jpeg")
        assert len(registry) == 0

    def test_list_by_kind(self):
        registry = AssetRegistry()
        registry.add(_asset("a.jpeg"))
        registry.add(_asset("b.wav", kind=AssetKind.AUDIO))
        assert [a.filename for a in registry.list(AssetKind.AUDIO)] == ["b.wav"]
        assert "a.jpeg" in registry

    def test_save_all_skips_remote_assets(self, tmp_path):
        registry = AssetRegistry()
        registry.add(_asset("local.jpeg", data=b"bytes"))
        registry.add(_asset("remote.mp4", kind=AssetKind.VIDEO, data=None))

        paths = registry.save_all(tmp_path)

        assert [p.name for p in paths] == ["local.jpeg"]
        assert (tmp_path / "local.jpeg").read_bytes() == b"bytes"


# ============================================================
# Board
# ============================================================

class TestResultBoard:

    def test_publish_prepends_and_append_appends(self):
        board = ResultBoard()
        first = board.publish(ResultCard(kind="image", prompt="one"))
        second = board.publish(ResultCard(kind="image", prompt="two"))
        scene = board.append(ResultCard(kind="scene", prompt="three"))
        assert board.cards == [second, first, scene]

    def test_card_ids_are_unique(self):
        cards = [ResultCard(kind="video", prompt=str(i)) for i in range(5)]
        assert len({c.card_id for c in cards}) == 5

    def test_remove_unknown(self):
        assert ResultBoard().remove(12345) is None

    def test_card_lifecycle(self):
        card = ResultCard(kind="video", prompt="p")
        card.set_retry("Searching Freepik library...", 3)
        assert card.status == "Searching Freepik library... (3)"
        assert card.state == CardState.RUNNING

        card.fail("Error: boom")
        assert card.error == "Error: boom"
        assert not card.loading

        card.set_status("Trying again")
        assert card.error is None

        card.complete()
        assert card.state == CardState.DONE
