"""
API routes for specpaste.
"""
from typing import Any, Dict, List, Optional, Type

from flask import Blueprint, jsonify, request
from pydantic import BaseModel, ValidationError

from ..config import Config
from ..errors import SpecPasteError
from ..extractors.page_fetcher import PageFetcher
from ..logger import get_logger
from ..models import CrowdAlias
from ..schemas.requests import (
    ApplyRequest,
    BatchRequest,
    BoundariesRequest,
    DiffRequest,
    FetchRequest,
    ParseRequest,
    RecordAliasRequest,
    SchemaRequest,
)
from ..services.apply_payload import build_apply_payload
from ..services.batch_parser import detect_boundaries, parse_batch
from ..services.crowd_aliases import CrowdAliasStore
from ..services.diff_engine import diff_specs
from ..services.parser import parse

logger = get_logger(__name__)

# Create blueprint
api_bp = Blueprint('api', __name__, url_prefix='/api')


class RequestValidationError(Exception):
    """Raised when a request body fails schema validation."""


def get_alias_store() -> CrowdAliasStore:
    """Get the crowd alias store from configuration."""
    return CrowdAliasStore.from_config()


def get_page_fetcher() -> PageFetcher:
    """Get the page fetcher from configuration."""
    return PageFetcher.from_config()


def _validate(schema: Type[BaseModel]) -> Any:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise RequestValidationError("Request body must be a JSON object")
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'body'}: {err['msg']}" for err in e.errors()
        )
        raise RequestValidationError(problems) from e


def _crowd_aliases(req: SchemaRequest) -> Optional[List[CrowdAlias]]:
    supplied = req.supplied_aliases()
    if supplied is not None:
        return supplied
    if not req.use_crowd_aliases:
        return None
    store = get_alias_store()
    if not store.enabled:
        return None
    return store.fetch(min_usage=Config.CROWD_ALIAS_MIN_USAGE)


def _error(message: str, status: int, details: Optional[Dict[str, Any]] = None):
    body: Dict[str, Any] = {'status': 'error', 'message': message}
    if details:
        body['details'] = details
    return jsonify(body), status


@api_bp.errorhandler(RequestValidationError)
def handle_validation_error(e: RequestValidationError):
    return _error(str(e), 400)


@api_bp.errorhandler(SpecPasteError)
def handle_collaborator_error(e: SpecPasteError):
    logger.error(f"Collaborator failure: {e.message}")
    return _error(e.message, 502, e.details)


@api_bp.errorhandler(Exception)
def handle_unexpected_error(e: Exception):
    logger.error(f"Unexpected error in {request.path}: {e}", exc_info=True)
    return _error('Internal server error', 500)


@api_bp.route('/parse', methods=['POST'])
def parse_text():
    """
    Parse pasted product text.

    Expected JSON:
    {
        "text": "Sensor Type\\tFull-Frame CMOS\\nWeight\\t658g",
        "schema": {"Cameras": [{"name": "Sensor Type"}, {"name": "Weight"}]}
    }

    Returns:
    {
        "status": "success",
        "result": {...ParseResult...}
    }
    """
    req = _validate(ParseRequest)
    result = parse(req.text, req.to_schema(), _crowd_aliases(req))
    logger.info(f"Parsed {len(req.text)} chars: {len(result.fields)} fields matched")
    return jsonify({'status': 'success', 'result': result.to_dict()})


@api_bp.route('/batch', methods=['POST'])
def parse_batch_text():
    """Parse text describing one or more products."""
    req = _validate(BatchRequest)
    items = parse_batch(req.text, req.to_schema(), _crowd_aliases(req))
    logger.info(f"Batch parse produced {len(items)} items")
    return jsonify({
        'status': 'success',
        'items': [item.to_dict() for item in items],
        'count': len(items),
    })


@api_bp.route('/boundaries', methods=['POST'])
def boundaries():
    """Detect product segments without parsing them."""
    req = _validate(BoundariesRequest)
    segments = detect_boundaries(req.text)
    return jsonify({
        'status': 'success',
        'segments': [s.to_dict() for s in segments],
        'count': len(segments),
    })


@api_bp.route('/apply', methods=['POST'])
def apply_payload():
    """
    Parse text and build the form payload.

    Expected JSON:
    {
        "text": "...",
        "schema": {...},
        "overrides": {"Weight": "650 g", "_manual_mappings": {"Color": "Black"}},
        "normalize_metric": true
    }
    """
    req = _validate(ApplyRequest)
    result = parse(req.text, req.to_schema(), _crowd_aliases(req))
    payload = build_apply_payload(result, req.overrides, normalize_metric=req.normalize_metric)
    return jsonify({'status': 'success', 'payload': payload.to_dict()})


@api_bp.route('/diff', methods=['POST'])
def diff():
    """Parse text and compare it against the item's stored values."""
    req = _validate(DiffRequest)
    result = parse(req.text, req.to_schema(), _crowd_aliases(req))
    entries = diff_specs(req.existing, result.fields)
    return jsonify({
        'status': 'success',
        'diff': [entry.to_dict() for entry in entries],
        'count': len(entries),
    })


@api_bp.route('/fetch', methods=['POST'])
def fetch_page():
    """
    Fetch a product page and optionally parse it.

    Returns:
    {
        "status": "success",
        "page": {"text": "...", "html": "...", "source_url": "...", "title": "..."},
        "result": {...}    # only when a schema was supplied
    }
    """
    req = _validate(FetchRequest)
    logger.info(f"Fetching product page: {req.url}")
    page = get_page_fetcher().fetch(req.url)

    body: Dict[str, Any] = {'status': 'success', 'page': page.to_dict()}
    schema = req.to_schema()
    if schema is not None:
        body['result'] = parse(page.text, schema).to_dict()
    return jsonify(body)


@api_bp.route('/aliases', methods=['POST'])
def record_alias():
    """Record a manual label -> field mapping in the crowd alias store."""
    req = _validate(RecordAliasRequest)
    store = get_alias_store()
    if not store.enabled:
        return _error('Crowd alias store is not configured', 503)
    recorded = store.record(req.source_key, req.spec_name, req.category)
    return jsonify({'status': 'success', 'recorded': recorded})
