"""Naming convention for driver images.

Driver images are published as ``<lang>-driver-<platform>-64-<build>``.
This module maps a language/platform selection onto the EC2 name filter
used to find them.

The two axes treat absence differently: a missing language falls back to
:data:`DEFAULT_LANG`, while a missing platform matches every platform.
"""

from __future__ import annotations

from enum import Enum


PLATFORM_WILDCARD = "*"


class ImageLang(str, Enum):
    """Driver languages with published images."""

    JAVA = "java"
    PYTHON = "python"
    NODEJS = "nodejs"
    CPP = "cpp"
    CSHARP = "csharp"

    def __str__(self) -> str:
        return self.value


class ImagePlatform(str, Enum):
    """Target platforms with published images."""

    BIONIC = "bionic"
    FOCAL = "focal"
    JAMMY = "jammy"
    ROCKY8 = "rocky8"
    ROCKY9 = "rocky9"
    WINDOWS = "windows"

    def __str__(self) -> str:
        return self.value


DEFAULT_LANG = ImageLang.JAVA


def resolve_language_default(lang: ImageLang | None) -> ImageLang:
    """Return *lang*, or :data:`DEFAULT_LANG` when no language was selected."""
    return DEFAULT_LANG if lang is None else lang


def resolve_platform_wildcard(platform: ImagePlatform | None) -> str | None:
    """Return the platform name, or None when every platform should match."""
    return None if platform is None else platform.value


def to_lang_string(lang: ImageLang | None) -> str:
    return resolve_language_default(lang).value


def to_platform_string(platform: ImagePlatform | None) -> str:
    return resolve_platform_wildcard(platform) or PLATFORM_WILDCARD


def build_filter_string(lang: ImageLang | None, platform: ImagePlatform | None) -> str:
    """Build the EC2 ``name`` filter for a language/platform selection.

    Examples:
        >>> build_filter_string(ImageLang.CPP, ImagePlatform.ROCKY9)
        'cpp-driver-rocky9-64-*'
        >>> build_filter_string(None, None)
        'java-driver-*'
    """
    lang_name = resolve_language_default(lang).value
    platform_name = resolve_platform_wildcard(platform)
    if platform_name is None:
        # the wildcard also swallows the -64 width qualifier
        return ("%s-driver-%s" % (lang_name, PLATFORM_WILDCARD)).lower()
    return ("%s-driver-%s-64-*" % (lang_name, platform_name)).lower()
