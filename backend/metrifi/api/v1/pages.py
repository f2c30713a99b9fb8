# metrifi/api/v1/pages.py
from flask import current_app, g, jsonify, request
from metrifi.application.cms.create_page import PageCreator
from metrifi.application.cms.options import PageCreatorOptions
from metrifi.application.cms.update_page import update_page
from metrifi.errors import NotFound
from metrifi.normalizers.page import normalize_page
from metrifi.services.content import ContentStore
from metrifi.services.fields import FieldStore
from metrifi.utils.decorators import basic_auth_required
from . import v1_bp


def _options():
    return PageCreatorOptions.from_config(current_app.config)


def _fields_for(page_id, field_store):
    if not current_app.config.get("EXPOSE_FIELDS_IN_REST", True):
        return None
    fields = field_store.read_fields(page_id)
    # Always expose the flexible content field, even before it has rows
    fields.setdefault(current_app.config["CONTENT_BLOCKS_FIELD"], None)
    return fields


@v1_bp.route("/create-page", methods=["POST"])
@basic_auth_required
def create_page():
    data = request.get_json(silent=True)

    creator = PageCreator(
        content_store=ContentStore(),
        field_store=FieldStore(),
        options=_options(),
    )
    result = creator.create(data, principal=g.current_principal)

    return jsonify(result), 200


@v1_bp.route("/pages/<page_id>", methods=["GET"])
@basic_auth_required
def get_page(page_id):
    content_store = ContentStore()
    page = content_store.get_page(page_id)
    if page is None:
        raise NotFound()

    return jsonify(normalize_page(
        page,
        link=content_store.get_permalink(page_id),
        fields=_fields_for(page_id, FieldStore()),
    ))


@v1_bp.route("/pages/<page_id>", methods=["POST", "PUT"])
@basic_auth_required
def edit_page(page_id):
    content_store = ContentStore()
    field_store = FieldStore()

    page = update_page(
        page_id=page_id,
        data=request.get_json(silent=True),
        content_store=content_store,
        field_store=field_store,
        options=_options(),
    )

    return jsonify(normalize_page(
        page,
        link=content_store.get_permalink(page_id),
        fields=_fields_for(page_id, field_store),
    )), 200
