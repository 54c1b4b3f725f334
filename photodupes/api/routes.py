"""
Flask routes for the photodupes web API.

Contains the endpoints that expose scanning, clustering, deletion and file
opening to a browser front end.
"""

from __future__ import annotations

import threading
import logging
from datetime import datetime

from flask import Blueprint, current_app, jsonify, request

from ..context import AppContext
from ..models import ImageRecord
from ..scanner.filtering import available_years, filter_by_years, group_by_year
from ..state import ScanState
from ..utils import validators
from .orchestrator import ScanOrchestrator

# Create blueprint for routes
api = Blueprint('api', __name__)

# Module logger
_logger = logging.getLogger(__name__)


def _context() -> AppContext:
    return current_app.extensions['photodupes']['context']


def _scan_state() -> ScanState:
    return current_app.extensions['photodupes']['scan_state']


def _groups_to_dicts(groups: list[list[ImageRecord]]) -> list[list[dict]]:
    return [[img.to_dict() for img in group] for group in groups]


def _records_from_request() -> list[ImageRecord]:
    """
    Records to cluster: the request's 'images' list if present, otherwise
    the last scan's results.
    """
    data = request.get_json(silent=True) or {}
    images = data.get('images')
    if images is None:
        return _scan_state().snapshot_images()
    return [ImageRecord.from_dict(item) for item in images]


# =============================================================================
# Route Handlers
# =============================================================================

@api.route('/api/ping')
def api_ping():
    """Simple endpoint for connection monitoring."""
    return jsonify({'status': 'ok', 'time': datetime.now().isoformat()})


@api.route('/api/scan', methods=['POST'])
def api_scan():
    """Start a new scan in the background."""
    data = request.get_json(silent=True)
    if not data:
        return jsonify({'error': 'Request body required'}), 400

    directory = str(data.get('directory', '')).strip()
    recursive, error = validators.parse_bool(data.get('recursive'), default=True)
    if recursive is None:
        return jsonify({'error': f"Invalid 'recursive': {error}"}), 400

    is_valid, error = validators.validate_directory(directory)
    if not is_valid:
        return jsonify({'error': error}), 400

    scan_state = _scan_state()
    if not scan_state.begin(directory, recursive):
        return jsonify({'error': 'A scan is already running'}), 409

    orchestrator = ScanOrchestrator(
        context=_context(),
        scan_state=scan_state,
        directory=directory,
        recursive=recursive,
    )

    thread = threading.Thread(target=orchestrator.run)
    thread.daemon = True
    thread.start()

    return jsonify({'status': 'started'})


@api.route('/api/status')
def api_status():
    """Return current scan status and progress."""
    return jsonify(_scan_state().to_status_dict())


@api.route('/api/images')
def api_images():
    """
    Return the records of the last completed scan.

    Query parameters:
        year: Exact year to keep (repeatable)
        year_prefix: Year search text, used when no year is given
        group_by_year: When true, answer with per-year buckets instead of a list
    """
    grouped, error = validators.parse_bool(request.args.get('group_by_year'), default=False)
    if grouped is None:
        return jsonify({'error': f"Invalid 'group_by_year': {error}"}), 400

    images = _scan_state().snapshot_images()
    selected = filter_by_years(
        images,
        years=request.args.getlist('year'),
        prefix=request.args.get('year_prefix'),
    )

    if not grouped:
        return jsonify([img.to_dict() for img in selected])

    return jsonify({
        'available_years': available_years(images),
        'groups': [
            {'year': year, 'images': [img.to_dict() for img in bucket]}
            for year, bucket in group_by_year(selected).items()
        ],
    })


@api.route('/api/years')
def api_years():
    """Return the distinct years of the last scan, newest first."""
    return jsonify(available_years(_scan_state().snapshot_images()))


@api.route('/api/duplicates/exact', methods=['POST'])
def api_exact_duplicates():
    """Group records by identical content hash."""
    try:
        records = _records_from_request()
        groups = _context().find_exact_duplicates(records)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        return jsonify({'error': f'Invalid image records: {e}'}), 400
    return jsonify(_groups_to_dicts(groups))


@api.route('/api/duplicates/similar', methods=['POST'])
def api_similar_duplicates():
    """Group records by perceptual-hash proximity."""
    try:
        records = _records_from_request()
        groups = _context().find_similar_duplicates(records)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        return jsonify({'error': f'Invalid image records: {e}'}), 400
    return jsonify(_groups_to_dicts(groups))


@api.route('/api/delete', methods=['POST'])
def api_delete():
    """Delete files and report the outcome per path."""
    data = request.get_json(silent=True)
    if not data:
        return jsonify({'error': 'Request body required'}), 400

    paths = data.get('paths')
    is_valid, error = validators.validate_path_list(paths)
    if not is_valid:
        return jsonify({'error': error}), 400

    outcomes = _context().delete(paths)
    _scan_state().forget({o.path for o in outcomes if o.deleted})

    return jsonify([o.to_dict() for o in outcomes])


@api.route('/api/open', methods=['POST'])
def api_open():
    """Open a file in the OS default viewer."""
    data = request.get_json(silent=True) or {}
    path = str(data.get('path', '')).strip()
    if not path:
        return jsonify({'error': 'No path specified'}), 400

    return jsonify({'opened': _context().open(path)})


@api.route('/api/cache/stats')
def api_cache_stats():
    """Return cache statistics."""
    return jsonify(_context().cache.get_stats())


@api.route('/api/cache/clear', methods=['POST'])
def api_cache_clear():
    """Clear the image analysis cache."""
    _context().cache.clear()
    return jsonify({'status': 'cleared'})
