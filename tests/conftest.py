"""
Pytest configuration and fixtures for classes-content tests.
"""

import sys
from pathlib import Path
from urllib.parse import unquote

import httpx
import pytest

# Add src directory to Python path to allow importing classes_content
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from classes_content.cache import ResolutionCache  # noqa: E402
from classes_content.config import ContentConfig  # noqa: E402
from classes_content.loader import ClassesContentLoader  # noqa: E402

TEST_ROOT = "https://raw.test/Classes"


# Configure anyio to only use asyncio (not trio)
@pytest.fixture
def anyio_backend():
    return "asyncio"


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeContentStore:
    """In-memory content repository served through httpx.MockTransport.

    Documents are keyed by decoded URL path ("/Classes/Paladin/Paladin.md").
    Every request path is recorded, in order, in `requests`.
    """

    def __init__(self, documents: dict[str, str] | None = None) -> None:
        self.documents = dict(documents or {})
        self.requests: list[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = unquote(request.url.raw_path.decode("ascii").split("?", 1)[0])
        self.requests.append(path)
        if path in self.documents:
            return httpx.Response(200, text=self.documents[path])
        return httpx.Response(404, text="404: Not Found")

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


OCCULTISTE_MD = """# Occultiste

Les occultistes tirent leur magie d'un pacte conclu avec une entité.

### Niveau 1 : Magie de pacte
Vous connaissez deux sorts mineurs d'occultiste.

### Niveau 3 : Sous-classe d'occultiste
Choisissez un protecteur.

### Niveau 6 : Capacité de sous-classe
Vous gagnez une capacité de votre protecteur.
"""

FIELON_MD = """### Niveau 3 : Bénédiction du ténébreux
Quand vous réduisez un ennemi à 0 point de vie, vous gagnez des points de vie temporaires.

### Niveau 7 : Chance du ténébreux
Ajoutez un d10 à un test de caractéristique ou un jet de sauvegarde.
"""

MAGICIEN_MD = """# Magicien

## Niveau 1 : Incantation
Le magicien prépare ses sorts depuis son grimoire.

## Niveau 2 : Érudit
Choisissez une compétence.
"""


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> FakeContentStore:
    return FakeContentStore({
        "/Classes/Occultiste/Occultiste.md": OCCULTISTE_MD,
        "/Classes/Occultiste/Subclasses/Sous-classe - Protecteur Fiélon.md": FIELON_MD,
        "/Classes/Magicien/Magicien.md": MAGICIEN_MD,
    })


@pytest.fixture
def loader(store: FakeContentStore, clock: FakeClock) -> ClassesContentLoader:
    """Loader wired to the fake store, with one root and a fake clock."""
    config = ContentConfig(raw_bases=[TEST_ROOT])
    cache = ResolutionCache(negative_ttl=config.negative_ttl, clock=clock)
    return ClassesContentLoader(config=config, cache=cache, client=store.client())


@pytest.fixture
def make_loader(clock: FakeClock):
    """Factory building a loader over a fresh store of `documents`.

    Returns (loader, store).
    """

    def factory(documents: dict[str, str], roots: list[str] | None = None):
        store = FakeContentStore(documents)
        config = ContentConfig(raw_bases=roots or [TEST_ROOT])
        cache = ResolutionCache(negative_ttl=config.negative_ttl, clock=clock)
        return ClassesContentLoader(config=config, cache=cache, client=store.client()), store

    return factory
