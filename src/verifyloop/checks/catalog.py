# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Static catalog of standard and platform-specific quality checks.

The order of :data:`QUALITY_CHECKS` encodes a dependency rule: type errors
cascade into lint, format, test, and build failures, so the cheaper and more
foundational checks run first.
"""

from __future__ import annotations

from collections.abc import Collection, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Final, Literal, get_args

from .models import CheckDefinition, Invocation

PackageManager = Literal["pnpm", "npm", "yarn", "bun"]
PlatformType = Literal["shopify-theme", "shopify-hydrogen", "wordpress", "magento", "woocommerce"]

PACKAGE_MANAGERS: Final[tuple[PackageManager, ...]] = get_args(PackageManager)
PLATFORM_TYPES: Final[tuple[PlatformType, ...]] = get_args(PlatformType)
DEFAULT_PACKAGE_MANAGER: Final[PackageManager] = "pnpm"


def script_invocation(package_manager: PackageManager, script: str, *extra: str) -> Invocation:
    """Return the invocation running manifest ``script`` through ``package_manager``.

    Args:
        package_manager: Package manager used to dispatch manifest scripts.
        script: Name of the manifest script.
        *extra: Additional arguments forwarded to the script.

    Returns:
        Invocation: Invocation launching the script.
    """

    if package_manager == "npm":
        forwarded = ("--", *extra) if extra else ()
        return Invocation(command="npm", args=("run", script, *forwarded))
    if package_manager == "bun":
        return Invocation(command="bun", args=("run", script, *extra))
    return Invocation(command=package_manager, args=(script, *extra))


def standard_checks(package_manager: PackageManager = DEFAULT_PACKAGE_MANAGER) -> tuple[CheckDefinition, ...]:
    """Return the ordered standard checks dispatched through ``package_manager``."""

    return (
        CheckDefinition(
            name="typecheck",
            display_name="Type Check",
            invocation=script_invocation(package_manager, "typecheck"),
            required_script="typecheck",
            fallback=Invocation(command="tsc", args=("--noEmit",)),
        ),
        CheckDefinition(
            name="lint",
            display_name="Lint",
            invocation=script_invocation(package_manager, "lint"),
            fix=script_invocation(package_manager, "lint", "--fix"),
            can_auto_fix=True,
            required_script="lint",
        ),
        CheckDefinition(
            name="format",
            display_name="Format",
            invocation=script_invocation(package_manager, "format", "--check"),
            fix=script_invocation(package_manager, "format"),
            can_auto_fix=True,
            required_script="format",
        ),
        CheckDefinition(
            name="test",
            display_name="Tests",
            invocation=script_invocation(package_manager, "test"),
            required_script="test",
        ),
        CheckDefinition(
            name="build",
            display_name="Build",
            invocation=script_invocation(package_manager, "build"),
            required_script="build",
        ),
    )


QUALITY_CHECKS: Final[tuple[CheckDefinition, ...]] = standard_checks()


@dataclass(frozen=True, slots=True)
class PlatformCLIInstall:
    """How to provision the external CLI a platform's checks depend on."""

    cli: str
    install: tuple[str, ...]
    display_name: str
    requires_composer: bool
    docs_url: str

    @property
    def prerequisite(self) -> str:
        """Return the executable needed to run :attr:`install`."""

        return self.install[0]

    def format_install(self) -> str:
        """Return the install command rendered for display."""

        return " ".join(self.install)


PLATFORM_CLI_INSTALL: Final[Mapping[PlatformType, PlatformCLIInstall]] = MappingProxyType(
    {
        "shopify-theme": PlatformCLIInstall(
            cli="shopify",
            install=("npm", "install", "-g", "@shopify/cli", "@shopify/theme"),
            display_name="Shopify CLI",
            requires_composer=False,
            docs_url="https://shopify.dev/docs/api/shopify-cli",
        ),
        "shopify-hydrogen": PlatformCLIInstall(
            cli="shopify",
            install=("npm", "install", "-g", "@shopify/cli", "@shopify/cli-hydrogen"),
            display_name="Shopify CLI",
            requires_composer=False,
            docs_url="https://shopify.dev/docs/api/shopify-cli",
        ),
        "wordpress": PlatformCLIInstall(
            cli="phpcs",
            install=("composer", "global", "require", "wp-coding-standards/wpcs"),
            display_name="PHP_CodeSniffer (WordPress Coding Standards)",
            requires_composer=True,
            docs_url="https://github.com/WordPress/WordPress-Coding-Standards",
        ),
        "magento": PlatformCLIInstall(
            cli="phpcs",
            install=("composer", "global", "require", "magento/magento-coding-standard"),
            display_name="PHP_CodeSniffer (Magento Coding Standard)",
            requires_composer=True,
            docs_url="https://github.com/magento/magento-coding-standard",
        ),
        "woocommerce": PlatformCLIInstall(
            cli="phpcs",
            install=("composer", "global", "require", "woocommerce/woocommerce-sniffs"),
            display_name="PHP_CodeSniffer (WooCommerce Sniffs)",
            requires_composer=True,
            docs_url="https://github.com/woocommerce/woocommerce-sniffs",
        ),
    },
)


def _phpcs_check(platform: PlatformType, name: str, display_name: str, standard: str) -> CheckDefinition:
    flag = f"--standard={standard}"
    return CheckDefinition(
        name=name,
        display_name=display_name,
        invocation=Invocation(command="phpcs", args=(flag, ".")),
        fix=Invocation(command="phpcbf", args=(flag, ".")),
        can_auto_fix=True,
        # phpcbf exits 1 after fixing every fixable violation.
        fix_success_codes=(0, 1),
        platform=platform,
    )


PLATFORM_CHECKS: Final[tuple[CheckDefinition, ...]] = (
    CheckDefinition(
        name="shopify-theme-check",
        display_name="Shopify Theme Check",
        invocation=Invocation(command="shopify", args=("theme", "check")),
        platform="shopify-theme",
    ),
    CheckDefinition(
        name="shopify-hydrogen-check",
        display_name="Shopify Hydrogen Routes Check",
        invocation=Invocation(command="shopify", args=("hydrogen", "check", "routes")),
        platform="shopify-hydrogen",
    ),
    _phpcs_check("wordpress", "wordpress-phpcs", "WordPress Coding Standards", "WordPress"),
    _phpcs_check("magento", "magento-phpcs", "Magento Coding Standard", "Magento2"),
    _phpcs_check("woocommerce", "woocommerce-phpcs", "WooCommerce Coding Standards", "WooCommerce-Core"),
)


@dataclass(frozen=True, slots=True)
class CheckCatalog:
    """Immutable set of check definitions injected into the orchestrator."""

    standard: tuple[CheckDefinition, ...] = QUALITY_CHECKS
    platform: tuple[CheckDefinition, ...] = PLATFORM_CHECKS
    platform_installs: Mapping[str, PlatformCLIInstall] = field(default_factory=lambda: PLATFORM_CLI_INSTALL)

    def platform_checks_for(self, platform: str) -> tuple[CheckDefinition, ...]:
        """Return the platform checks registered for ``platform`` in catalog order."""

        return tuple(check for check in self.platform if check.platform == platform)

    def install_for(self, platform: str) -> PlatformCLIInstall | None:
        """Return the CLI install specification for ``platform`` when known."""

        return self.platform_installs.get(platform)

    def without(self, names: Collection[str]) -> CheckCatalog:
        """Return a catalog whose standard checks exclude ``names``."""

        if not names:
            return self
        excluded = set(names)
        return replace(self, standard=tuple(check for check in self.standard if check.name not in excluded))

    def with_package_manager(self, package_manager: PackageManager) -> CheckCatalog:
        """Return a catalog whose standard checks dispatch through ``package_manager``."""

        rebuilt = {check.name: check for check in standard_checks(package_manager)}
        return replace(
            self,
            standard=tuple(rebuilt.get(check.name, check) for check in self.standard),
        )


DEFAULT_CATALOG: Final[CheckCatalog] = CheckCatalog()


__all__ = [
    "DEFAULT_CATALOG",
    "DEFAULT_PACKAGE_MANAGER",
    "PACKAGE_MANAGERS",
    "PLATFORM_CHECKS",
    "PLATFORM_CLI_INSTALL",
    "PLATFORM_TYPES",
    "QUALITY_CHECKS",
    "CheckCatalog",
    "PackageManager",
    "PlatformCLIInstall",
    "PlatformType",
    "script_invocation",
    "standard_checks",
]
