from __future__ import annotations

from pathlib import Path

from themecomposer import runtime_paths


def test_source_package_root_points_to_repo_package() -> None:
    """Test the source checkout resolves to the package directory."""
    root = runtime_paths.package_root()
    assert root.name == "themecomposer"
    assert (root / "core").exists()


def test_builtin_themes_root_has_variant_dirs() -> None:
    """Test every variant ships a built-in theme directory."""
    root = runtime_paths.builtin_themes_root()
    assert root.name == "builtin"
    variants = {path.name for path in root.iterdir()}
    assert {"songs", "bible", "two-line", "obs-songs", "prayer", "dual-translation"} <= variants


def test_frozen_prefers_meipass_package_dir(tmp_path: Path, monkeypatch) -> None:
    """Test a frozen bundle uses the package directory inside _MEIPASS."""
    bundle_root = tmp_path / "bundle"
    package_root = bundle_root / "themecomposer"
    package_root.mkdir(parents=True)
    monkeypatch.setattr(runtime_paths.sys, "frozen", True, raising=False)
    monkeypatch.setattr(runtime_paths.sys, "_MEIPASS", str(bundle_root), raising=False)

    assert runtime_paths.package_root() == package_root


def test_frozen_falls_back_to_meipass_when_package_missing(tmp_path: Path, monkeypatch) -> None:
    """Test a frozen bundle without the package directory uses _MEIPASS itself."""
    bundle_root = tmp_path / "bundle"
    bundle_root.mkdir(parents=True)
    monkeypatch.setattr(runtime_paths.sys, "frozen", True, raising=False)
    monkeypatch.setattr(runtime_paths.sys, "_MEIPASS", str(bundle_root), raising=False)

    assert runtime_paths.package_root() == bundle_root
