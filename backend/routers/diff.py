"""Diff API endpoints"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from models.diff import (
    DiffRequest,
    DiffResult,
    EnhancedDiffRequest,
    EnhancedDiffResponse,
    IdenticalResponse,
    InlineDiffResponse,
    PatchRequest,
    PatchResponse,
    UnifiedDiffResponse,
)
from services.config_manager import ConfigManager
from services.diff_generator import DiffGenerator, DiffSizeLimitError
from services.enhanced_diff import format_hunk_header

router = APIRouter()


def get_diff_generator() -> DiffGenerator:
    """Build a generator from the current configuration"""
    return DiffGenerator.from_config(ConfigManager.get_instance().get_config())


def too_large(e: DiffSizeLimitError) -> HTTPException:
    return HTTPException(status_code=413, detail=str(e))


@router.post("/lines", response_model=DiffResult)
async def diff_lines(request: DiffRequest) -> DiffResult:
    """Line-level diff with aligned left/right arrays"""
    try:
        return get_diff_generator().diff(request.left, request.right, request.options)
    except DiffSizeLimitError as e:
        raise too_large(e)


@router.post("/inline", response_model=InlineDiffResponse)
async def diff_inline(request: DiffRequest) -> InlineDiffResponse:
    """Character-level diff of two single lines"""
    try:
        segments = get_diff_generator().inline(request.left, request.right, request.options)
    except DiffSizeLimitError as e:
        raise too_large(e)
    return InlineDiffResponse(segments=segments)


@router.post("/enhanced", response_model=EnhancedDiffResponse)
async def diff_enhanced(request: EnhancedDiffRequest) -> EnhancedDiffResponse:
    """Hunk-grouped diff with inline highlighting"""
    try:
        result = get_diff_generator().enhanced(
            request.left,
            request.right,
            request.options,
            request.context_lines,
        )
    except DiffSizeLimitError as e:
        raise too_large(e)

    return EnhancedDiffResponse(
        hunks=result.hunks,
        stats=result.stats,
        headers=[format_hunk_header(hunk) for hunk in result.hunks],
    )


@router.post("/unified", response_model=UnifiedDiffResponse)
async def diff_unified(request: DiffRequest) -> UnifiedDiffResponse:
    """Unified (+/-/space) view"""
    try:
        lines = get_diff_generator().unified(request.left, request.right, request.options)
    except DiffSizeLimitError as e:
        raise too_large(e)
    return UnifiedDiffResponse(lines=lines)


@router.post("/identical", response_model=IdenticalResponse)
async def diff_identical(request: DiffRequest) -> IdenticalResponse:
    """Check whether two texts are equal under the comparison options"""
    identical = get_diff_generator().identical(request.left, request.right, request.options)
    return IdenticalResponse(identical=identical)


@router.post("/patch", response_model=PatchResponse)
async def diff_patch(request: PatchRequest) -> PatchResponse:
    """Git-style patch text"""
    try:
        patch = get_diff_generator().patch(
            request.left,
            request.right,
            request.options,
            request.context_lines,
            request.from_label,
            request.to_label,
        )
    except DiffSizeLimitError as e:
        raise too_large(e)
    return PatchResponse(patch=patch)
