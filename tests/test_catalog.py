from __future__ import annotations

import dataclasses

import pytest

from ocr_artifacts.catalog import CATALOG, DEFAULT_VERSION_ID, lookup, version_ids


def test_lookup_known_versions() -> None:
    v4 = lookup("V4")
    assert v4.id == "V4"
    assert v4.display_name == "PP-OCRv4"
    assert v4.det_name == "ch_PP-OCRv4_det_infer.onnx"
    assert v4.rec_name == "ch_PP-OCRv4_rec_infer.onnx"
    assert v4.cls_name == "ch_ppocr_mobile_v2.0_cls_infer.onnx"
    assert v4.dict_name == "ppocr_keys_v1.txt"


@pytest.mark.parametrize("unknown", ["V9", "", "v3", None])
def test_lookup_unknown_falls_back_to_default(unknown) -> None:
    assert lookup(unknown) is CATALOG[DEFAULT_VERSION_ID]
    assert lookup(unknown).id == "V3"


def test_version_ids_in_declaration_order() -> None:
    assert version_ids() == ["V3", "V4", "V5"]


def test_bundled_flag_follows_remote_sources() -> None:
    assert lookup("V3").is_bundled is True
    assert lookup("V4").is_bundled is False
    assert lookup("V4").dict_source_url is None
    assert lookup("V5").dict_source_url is not None


def test_catalog_is_read_only() -> None:
    with pytest.raises(TypeError):
        CATALOG["V6"] = lookup("V3")  # type: ignore[index]

    with pytest.raises(dataclasses.FrozenInstanceError):
        lookup("V3").det_name = "other.onnx"  # type: ignore[misc]
