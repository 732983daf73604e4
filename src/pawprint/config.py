"""Pawprint configuration.

SitemapConfig is the central configuration object, frozen after creation.
Every field holds a concrete value once constructed: defaults are resolved
here, at the boundary, never at the point of use.
"""

from dataclasses import dataclass, field
from pathlib import Path

from pawprint._errors import ConfigError
from pawprint._types import (
    CHANGE_FREQUENCIES,
    CLASH_POLICIES,
    PAGE_CONVENTIONS,
    ChangeFreq,
    ClashPolicy,
    DateFormatter,
    PageConvention,
)
from pawprint.sitemap.entries import SitemapEntry, iso_timestamp


@dataclass(frozen=True, slots=True)
class RobotsConfig:
    """Options for the generated ``robots.txt``.

    Attributes:
        user_agent: Crawler the rules apply to.
        disallow_cloudflare: Emit ``Disallow: /cdn-cgi/`` for Cloudflare
            proxy endpoints.

    """

    user_agent: str = "*"
    disallow_cloudflare: bool = True


@dataclass(frozen=True, slots=True)
class DebugConfig:
    """Diagnostic output switches.

    Attributes:
        print_routes: Print every final sitemap URL after a pass.
        print_ignored: Print every page skipped because of an ``_`` or ``@``
            segment.

    """

    print_routes: bool = False
    print_ignored: bool = False


@dataclass(frozen=True, slots=True)
class SitemapConfig:
    """Configuration for a pawprint generation pass.

    Attributes:
        root: Project root.  Always resolved to an absolute path on construction.
        pages_dir: Directory (relative to root) scanned for page files.
        base_url: Absolute site URL prefixed to every route
            (e.g. ``https://example.com``).  Required for ``build``.
        filename: Sitemap file name, also used in the robots ``Sitemap:`` line.
        output: Directory the files are written to (relative to root unless absolute).
        default_changefreq: ``<changefreq>`` for discovered pages, or None.
        default_priority: ``<priority>`` for discovered pages, or None.
        custom_entries: Extra, fully-formed entries merged after discovery.
        on_clash: Policy for page files resolving to the same URL.
        format_date: Formats a file's mtime for ``<lastmod>``.
        page_convention: ``directory`` (``+Page.tsx``) or ``suffix``
            (``about+Page.tsx``).
        domain_driven: Treat directories named ``pages`` as transparent.
        robots: robots.txt options, or None to skip robots.txt entirely.
        debug: Diagnostic output switches.
        host: Bind address for ``pawprint dev``.
        port: Bind port for ``pawprint dev``.
        dev_write: Also write files to ``output`` after each dev regeneration.

    """

    root: Path = field(default_factory=Path.cwd)
    pages_dir: str = "pages"
    base_url: str = ""
    filename: str = "sitemap.xml"
    output: Path = field(default_factory=lambda: Path("dist/client"))
    default_changefreq: ChangeFreq | None = "weekly"
    default_priority: float | None = 0.5
    custom_entries: tuple[SitemapEntry, ...] = ()
    on_clash: ClashPolicy = "ignore"
    format_date: DateFormatter = iso_timestamp
    page_convention: PageConvention = "directory"
    domain_driven: bool = False
    robots: RobotsConfig | None = field(default_factory=RobotsConfig)
    debug: DebugConfig = field(default_factory=DebugConfig)
    host: str = "127.0.0.1"
    port: int = 3000
    dev_write: bool = False

    def __post_init__(self) -> None:
        # Resolve root to absolute so that watchfiles (which returns
        # absolute paths) can be compared via Path.relative_to().
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())
        if not isinstance(self.output, Path):
            object.__setattr__(self, "output", Path(str(self.output)))
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        object.__setattr__(self, "custom_entries", tuple(self.custom_entries))

        if self.on_clash not in CLASH_POLICIES:
            msg = (
                f"Unknown on_clash policy {self.on_clash!r}; "
                f"expected one of {sorted(CLASH_POLICIES)}"
            )
            raise ConfigError(msg)
        if self.page_convention not in PAGE_CONVENTIONS:
            msg = (
                f"Unknown page_convention {self.page_convention!r}; "
                f"expected one of {sorted(PAGE_CONVENTIONS)}"
            )
            raise ConfigError(msg)
        if (
            self.default_changefreq is not None
            and self.default_changefreq not in CHANGE_FREQUENCIES
        ):
            msg = f"Unknown default_changefreq {self.default_changefreq!r}"
            raise ConfigError(msg)
        if not self.filename or "/" in self.filename:
            msg = f"Invalid sitemap filename {self.filename!r}"
            raise ConfigError(msg)

    @property
    def pages_path(self) -> Path:
        """Absolute path to the scanned pages directory."""
        return self.root / self.pages_dir

    @property
    def output_path(self) -> Path:
        """Absolute path to output directory."""
        if self.output.is_absolute():
            return self.output
        return self.root / self.output

    @property
    def effective_base_url(self) -> str:
        """Base URL, falling back to the dev server address when unset."""
        return self.base_url or f"http://{self.host}:{self.port}"

    @property
    def sitemap_url(self) -> str:
        """Absolute URL of the sitemap, as advertised in robots.txt."""
        return f"{self.effective_base_url}/{self.filename}"

    def require_base_url(self) -> None:
        """Fail fast when an absolute base URL is mandatory (build mode).

        Raises:
            ConfigError: If ``base_url`` is empty.

        """
        if not self.base_url:
            msg = (
                "base_url is required to build a sitemap; "
                "pass --base-url or set base_url in pawprint.yaml"
            )
            raise ConfigError(msg)
