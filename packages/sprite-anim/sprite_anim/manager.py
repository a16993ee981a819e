"""Manager - per-path cache of shared sprite data."""
from __future__ import annotations

import logging
import os
import random
import threading
from typing import Callable

from sprite_anim.config import AnimConfig
from sprite_anim.shared import SharedSpriteData
from sprite_anim.sprite import Sprite
from sprite_anim.types import SpriteError

logger = logging.getLogger(__name__)

Loader = Callable[[str], SharedSpriteData]


class Manager:
    """Loads each sprite source once and hands out sprites that share it.

    *loader* turns a normalized path into SharedSpriteData; its errors
    propagate out of load_sprite() unchanged.  Concurrent first loads of
    the same path construct the data only once.
    """

    def __init__(
        self,
        loader: Loader,
        *,
        seed: int | None = None,
        config: AnimConfig | None = None,
    ) -> None:
        self._loader = loader
        self._config = config if config is not None else AnimConfig()
        self._shared: dict[str, SharedSpriteData] = {}
        self._load_lock = threading.Lock()
        self._rng_lock = threading.Lock()
        self._closed = False

        if seed is None:
            seed = int.from_bytes(os.urandom(8))
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def config(self) -> AnimConfig:
        return self._config

    def load_shared(self, path: str) -> SharedSpriteData:
        if self._closed:
            raise SpriteError("Manager is closed")
        key = os.path.normpath(path)
        shared = self._shared.get(key)
        if shared is not None:
            return shared
        with self._load_lock:
            if self._closed:
                raise SpriteError("Manager is closed")
            shared = self._shared.get(key)
            if shared is None:
                logger.debug("Loading sprite data from %s", key)
                shared = self._loader(key)
                self._shared[key] = shared
        return shared

    def load_sprite(self, path: str) -> Sprite:
        """Return a new sprite at the start nodes of *path*'s graphs."""
        shared = self.load_shared(path)
        with self._rng_lock:
            rng = random.Random(self._rng.getrandbits(64))
        return Sprite(shared, rng=rng, config=self._config)

    def paths(self) -> list[str]:
        with self._load_lock:
            return sorted(self._shared)

    def clear(self) -> None:
        """Forget all cached data.  Existing sprites keep their references."""
        with self._load_lock:
            self._shared.clear()

    def close(self) -> None:
        """Drop the cache and refuse further loads."""
        with self._load_lock:
            self._closed = True
            self._shared.clear()

    def __enter__(self) -> Manager:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
