"""Configuration Service - load orchestration, snapshot access and option binding.

The service fans out to every registered provider, waits for all of them,
merges their sections and swaps the merged snapshot in as one step. Reads
(``get_value``, ``bind``) only ever see a complete snapshot.

Usage:
    service = ConfigService([
        YamlFileConfigProvider("app.yaml"),
        EnvironmentConfigProvider(prefix="APP__"),
    ])
    await service.load()

    port = service.get_value("server:port")
    db = service.bind(DatabaseOptions)
"""

import asyncio
import logging
import re
from typing import Any, Callable, Iterable, Mapping, Optional, TypeVar, Union

from .binding import SectionNames, bind_section, normalize_key
from .config.providers import ServiceOptions
from .errors import ProviderLoadError
from .events import LoadEventStream
from .interfaces import ConfigSection, ConfigValue, LoadingContext, LoadingStatus
from .providers.base import ConfigProvider
from .registry import ProviderRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")

_PATH_SEPARATORS = re.compile(r"[.:]")


class ConfigService:
    """Aggregates provider sections into one queryable snapshot.

    Args:
        providers: Providers in registration order, or a prepared registry.
            The first registered provider is merged last and wins collisions.
        options: Service options (``trace`` enables diagnostic logging)
        sections: Options type -> section key table used by :meth:`bind`
    """

    def __init__(
        self,
        providers: Union[ProviderRegistry, Iterable[ConfigProvider]] = (),
        options: Optional[ServiceOptions] = None,
        sections: Union[SectionNames, Mapping[type, str], None] = None,
    ):
        if isinstance(providers, ProviderRegistry):
            self._registry = providers
        else:
            self._registry = ProviderRegistry(providers)
        self.options = options or ServiceOptions()
        if isinstance(sections, SectionNames):
            self._sections = sections
        else:
            self._sections = SectionNames(sections)

        self.load_events = LoadEventStream()

        self._snapshot: ConfigSection = {}
        self._loading = False
        self._completed = False
        self._fetches: dict[str, asyncio.Task] = {}
        self._cycle: Optional[asyncio.Task] = None
        self._bound: dict[str, Any] = {}

    @property
    def providers(self) -> tuple[ConfigProvider, ...]:
        """Registered providers in application order."""
        return self._registry.providers

    @property
    def snapshot(self) -> ConfigSection:
        """The most recently merged configuration."""
        return self._snapshot

    @property
    def is_loaded(self) -> bool:
        return self._completed

    @property
    def is_loading(self) -> bool:
        return self._loading

    # --- Loading -------------------------------------------------------------

    async def load(self, force_reload: bool = False) -> ConfigSection:
        """Load configuration from all providers.

        Concurrent callers share a single load cycle and each provider is
        fetched at most once for it. ``force_reload`` starts a new cycle with
        fresh fetches; it does not cancel a cycle already running.

        Returns:
            The merged snapshot

        Raises:
            ProviderLoadError: If any provider fails. The previous snapshot
                is kept and a later call may retry.
        """
        if self._completed and not force_reload:
            self._trace("Configuration already loaded.")
            return self._snapshot

        if not self._loading:
            self._trace("Configuration loading started.")
            self._loading = True
            self._completed = False
            self.load_events.emit(LoadingContext(LoadingStatus.LOADING))

        if force_reload or self._cycle is None or self._cycle.done():
            cycle = asyncio.ensure_future(self._run_cycle(force_reload))
            self._cycle = cycle
        else:
            cycle = self._cycle

        # Shielded so one caller's cancellation does not abort the shared cycle
        return await asyncio.shield(cycle)

    async def _run_cycle(self, force_reload: bool) -> ConfigSection:
        providers = self._registry.providers
        fetches = [self._fetch(provider, force_reload) for provider in providers]
        results = await asyncio.gather(*fetches, return_exceptions=True)

        for provider, result in zip(providers, results):
            if isinstance(result, BaseException):
                self._loading = False
                self._completed = False
                logger.warning(f"Config provider '{provider.name}' failed: {result}")
                if isinstance(result, ProviderLoadError):
                    raise result
                raise ProviderLoadError(provider.name, result) from result

        merged: ConfigSection = {}
        for section in results:
            merged.update(section)

        self._snapshot = merged
        self._bound.clear()
        self._completed = True
        self._loading = False

        self._trace("Configuration loading completed.")
        self.load_events.emit(LoadingContext(LoadingStatus.LOADED))
        return merged

    def _fetch(self, provider: ConfigProvider, force_reload: bool) -> asyncio.Task:
        """Return the shared fetch task for a provider, starting one if needed."""
        name = provider.name
        task = self._fetches.get(name)
        stale = (
            task is None
            or force_reload
            or (task.done() and (task.cancelled() or task.exception() is not None))
        )
        if stale:
            task = asyncio.ensure_future(self._fetch_section(provider))
            self._fetches[name] = task
        return task

    async def _fetch_section(self, provider: ConfigProvider) -> ConfigSection:
        section = await provider.load()
        self._trace(provider.name, section)
        return section

    # --- Reading -------------------------------------------------------------

    def get_value(self, path: str) -> ConfigValue:
        """Resolve a ``.`` or ``:`` delimited path against the snapshot.

        Returns ``None`` when any segment is missing; never raises for a miss.
        """
        current: Any = self._snapshot
        for segment in _PATH_SEPARATORS.split(path):
            if not isinstance(current, Mapping) or segment not in current:
                return None
            current = current[segment]
        return current

    def has_value(self, path: str) -> bool:
        """Whether ``path`` is present in the snapshot, even with a ``None`` value."""
        *parents, leaf = _PATH_SEPARATORS.split(path)
        parent = self.get_value(".".join(parents)) if parents else self._snapshot
        return isinstance(parent, Mapping) and leaf in parent

    def bind(self, factory: Callable[[], T], section: Optional[str] = None) -> T:
        """Build an options object and coerce its fields from the snapshot.

        Args:
            factory: Zero-argument callable returning the defaults object;
                a dataclass type works directly.
            section: Section key to use instead of the one derived from
                the options type.

        Returns:
            The bound object, or the untouched defaults when the section is
            missing or not a mapping.
        """
        options = factory()
        if section is None:
            section = self._sections.section_for(type(options))
        key = normalize_key(section)

        cached = self._bound.get(key)
        if cached is not None:
            if cached is options:
                return cached
            del self._bound[key]

        values = self.get_value(key)
        if not isinstance(values, Mapping):
            return options

        bind_section(options, values)
        self._bound[key] = options
        return options

    def _trace(self, message: str, data: Any = None) -> None:
        if not self.options.trace:
            return
        if data is not None:
            logger.info(f"[ConfigService] {message}, data: {data}")
        else:
            logger.info(f"[ConfigService] {message}")
