from flask import Blueprint, jsonify, request

from schemas import SearchQuery, parse_args
from security import current_settings
from services import search as search_service

search_bp = Blueprint("search", __name__)


@search_bp.route("")
def search():
    query = parse_args(SearchQuery, request.args)
    results = search_service.search(
        query.q,
        query.type,
        current_settings(),
        count=query.count,
        offset=query.offset,
    )
    return jsonify(results)
