# src/ocr_artifacts/catalog.py
"""
Static table of known OCR model versions.

Each entry names the detector, classifier and recognizer model files and the
dictionary file that make up one version, plus the remote locations the
downloader uses for files that are not bundled with the application.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

_MODELSCOPE = "https://www.modelscope.cn/models/RapidAI/RapidOCR/resolve/v3.4.0"


@dataclass(frozen=True, slots=True)
class ModelVersion:
    id: str
    display_name: str
    det_name: str
    rec_name: str
    cls_name: str
    dict_name: str
    det_source_url: Optional[str] = None
    rec_source_url: Optional[str] = None
    dict_source_url: Optional[str] = None

    @property
    def is_bundled(self) -> bool:
        """True when every file ships with the application (no remote source)."""
        return not (self.det_source_url or self.rec_source_url or self.dict_source_url)


DEFAULT_VERSION_ID = "V3"

_VERSIONS: tuple[ModelVersion, ...] = (
    ModelVersion(
        id="V3",
        display_name="PP-OCRv3",
        det_name="ch_PP-OCRv3_det_infer.onnx",
        rec_name="ch_PP-OCRv3_rec_infer.onnx",
        cls_name="ch_ppocr_mobile_v2.0_cls_infer.onnx",
        dict_name="ppocr_keys_v1.txt",
    ),
    ModelVersion(
        id="V4",
        display_name="PP-OCRv4",
        det_name="ch_PP-OCRv4_det_infer.onnx",
        rec_name="ch_PP-OCRv4_rec_infer.onnx",
        cls_name="ch_ppocr_mobile_v2.0_cls_infer.onnx",
        # V4 shares the V3 dictionary
        dict_name="ppocr_keys_v1.txt",
        det_source_url=f"{_MODELSCOPE}/onnx/PP-OCRv4/det/ch_PP-OCRv4_det_infer.onnx",
        rec_source_url=f"{_MODELSCOPE}/onnx/PP-OCRv4/rec/ch_PP-OCRv4_rec_infer.onnx",
    ),
    ModelVersion(
        id="V5",
        display_name="PP-OCRv5",
        det_name="ch_PP-OCRv5_mobile_det.onnx",
        rec_name="ch_PP-OCRv5_rec_mobile_infer.onnx",
        cls_name="ch_ppocr_mobile_v2.0_cls_infer.onnx",
        dict_name="ppocrv5_dict.txt",
        det_source_url=f"{_MODELSCOPE}/onnx/PP-OCRv5/det/ch_PP-OCRv5_mobile_det.onnx",
        rec_source_url=f"{_MODELSCOPE}/onnx/PP-OCRv5/rec/ch_PP-OCRv5_rec_mobile_infer.onnx",
        dict_source_url=(
            f"{_MODELSCOPE}/paddle/PP-OCRv5/rec/ch_PP-OCRv5_rec_mobile_infer/ppocrv5_dict.txt"
        ),
    ),
)

CATALOG: Mapping[str, ModelVersion] = MappingProxyType({v.id: v for v in _VERSIONS})


def lookup(version_id: Optional[str]) -> ModelVersion:
    """Return the version registered under `version_id`, or the default version."""
    if version_id is not None:
        found = CATALOG.get(version_id.strip())
        if found is not None:
            return found
    return CATALOG[DEFAULT_VERSION_ID]


def version_ids() -> list[str]:
    return list(CATALOG)
