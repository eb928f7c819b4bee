"""End-to-end studio runs over the offline client"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from core.errors import UpstreamRequestError
from core.models.assets import AssetKind
from core.models.results import CardState
from core.providers.freepik import FreepikClient
from core.providers.mock import MockFreepikClient
from core.session import StudioSession
from tests.mocks.fixtures import make_config, make_reference_image, make_search_payload
from tests.mocks.sinks import RecordingSink
from workflows.orchestrator import StudioOrchestrator


@pytest.mark.integration
@pytest.mark.asyncio
async def test_full_session_across_modes(tmp_path):
    """Every mode in one session, then save and tear down"""
    sink = RecordingSink()
    client = MockFreepikClient()

    async with StudioSession(client, config=make_config(), sink=sink, user_name="Dewi") as session:
        studio = StudioOrchestrator(session)

        await studio.manual_single(["a lighthouse at dawn"])
        await studio.manual_batch("city at night\n\nforest at noon")
        await studio.images("red fox", number_of_images=2)
        await studio.voice("Selamat datang di studio kami")
        storyboard = await studio.film("A courier racing the storm", 3)
        film = await studio.filmmaker(make_reference_image(), "A day at the harbor", 3)
        await studio.ad(make_reference_image())
        await studio.generate_scene_video(film.cards[0].card_id)
        await studio.wait()

        videos = session.assets.list(AssetKind.VIDEO)
        # single + batch of two + ad + one filmmaker scene
        assert len(videos) == 5
        assert len(session.assets.list(AssetKind.IMAGE)) == 2 + 3
        # smart voice-over on three manual videos, voice mode, ad narration
        assert len(session.assets.list(AssetKind.AUDIO)) == 5
        assert all(c.state == CardState.PENDING for c in storyboard)

        assert sink.kinds().count("video") == 5
        assert sink.kinds().count("image") == 2
        assert {d[2] for d in sink.deliveries} == {"Dewi"}

        saved = session.assets.save_all(tmp_path)
        assert len(saved) == len(session.assets)

        bound = len(session.bindings)
        assert bound == 4

    assert session.bindings == {}
    assert session.pending_tasks == 0


@pytest.mark.integration
@pytest.mark.asyncio
async def test_upstream_outage_is_ridden_out(session, mock_client):
    """Consecutive 503s are retried until the search answers"""
    mock_client.fail_next(25)
    studio = StudioOrchestrator(session)

    card = await studio.manual_single(["waves"])
    await studio.wait()

    assert card.state == CardState.DONE
    assert len(mock_client.calls_to("generate_videos")) == 26


@pytest.mark.integration
@pytest.mark.asyncio
async def test_deleting_cards_mid_session(session):
    studio = StudioOrchestrator(session)
    first = await studio.manual_single(["waves"])
    second = await studio.manual_single(["dunes"])
    await studio.wait()

    assert studio.delete_card(first.card_id)

    remaining = {a.filename for a in session.assets}
    assert remaining == set(second.filenames)
    assert first.card_id not in session.bindings


# ============================================================
# Real client over a patched HTTP session
# ============================================================

def _http_session(status=200, payload=None, text=""):
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=payload)
    response.text = AsyncMock(return_value=text)

    request_cm = MagicMock()
    request_cm.__aenter__ = AsyncMock(return_value=response)
    request_cm.__aexit__ = AsyncMock(return_value=False)

    http = MagicMock()
    http.get = MagicMock(return_value=request_cm)
    http.__aenter__ = AsyncMock(return_value=http)
    http.__aexit__ = AsyncMock(return_value=False)
    return http


@pytest.mark.integration
@pytest.mark.asyncio
async def test_search_request_shape():
    http = _http_session(payload=make_search_payload(2))
    client = FreepikClient(api_key="fp-live-key")

    with patch("core.providers.freepik.aiohttp.ClientSession", return_value=http):
        resources = await client.search_resources("harbor at dusk")

    assert [r.id for r in resources] == [1, 2]
    url = http.get.call_args[0][0]
    kwargs = http.get.call_args[1]
    assert url == "https://api.freepik.com/v1/resources"
    assert kwargs["headers"]["X-Freepik-API-Key"] == "fp-live-key"
    assert kwargs["headers"]["Accept"] == "application/json"
    assert kwargs["params"]["q"] == "harbor at dusk"
    assert kwargs["params"]["include_tags"] == "true"
    assert kwargs["params"]["safe"] == "true"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_error_status_becomes_upstream_error():
    http = _http_session(status=503, text="busy")
    client = FreepikClient(api_key="fp-live-key")

    with patch("core.providers.freepik.aiohttp.ClientSession", return_value=http):
        with pytest.raises(UpstreamRequestError) as exc_info:
            await client.search_resources("harbor")

    assert exc_info.value.status == 503
    assert exc_info.value.retryable
    assert "503 busy" in str(exc_info.value)
