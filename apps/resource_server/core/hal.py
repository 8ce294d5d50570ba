"""
HAL resource representation

Resources render as plain JSON with ``_links`` and ``_embedded`` sections.
Relations outside the IANA set carry the ``sw360:`` curie prefix.
"""
from flask import Response, current_app, jsonify, request

HAL_MEDIA_TYPE = 'application/hal+json'


def hal_response(resource, status=200, headers=None):
    """JSON response for a resource, or an empty 204 when there is none"""
    if resource is None:
        return Response(status=204)
    body = resource.to_dict() if isinstance(resource, (HalResource, CollectionResource)) else resource
    response = jsonify(body)
    response.status_code = status
    response.mimetype = HAL_MEDIA_TYPE
    for name, value in (headers or {}).items():
        response.headers[name] = value
    return response


def api_url(*segments):
    """Absolute URL below the API base path for the current request"""
    base = request.host_url.rstrip('/') + current_app.config['API_BASE_PATH']
    path = '/'.join(str(segment).strip('/') for segment in segments if segment not in (None, ''))
    return f"{base}/{path}" if path else base


def curie(rel):
    return f"{current_app.config['CURIE_NAME']}:{rel}"


class HalResource:
    """Single HAL resource

    ``collection_rel`` names the relation this resource is listed under when
    it is embedded in a collection (for example ``sw360:releases``).
    """

    def __init__(self, content=None, collection_rel=None):
        self.content = dict(content or {})
        self.collection_rel = collection_rel
        self.links = {}
        self.embedded = {}

    def add_link(self, rel, href):
        self.links[rel] = {'href': href}
        return self

    def add_embedded_resource(self, rel, resource):
        """Append a resource (or raw value) to the embedded list for ``rel``"""
        self.embedded.setdefault(rel, []).append(resource)
        return self

    def set_embedded(self, rel, value):
        self.embedded[rel] = value
        return self

    def to_dict(self):
        body = dict(self.content)
        if self.links:
            body['_links'] = dict(self.links)
        if self.embedded:
            body['_embedded'] = {rel: _render(value) for rel, value in self.embedded.items()}
        return body


class CollectionResource:
    """Collection of HAL resources grouped by their collection relation"""

    def __init__(self, resources, default_rel=None):
        self.resources = list(resources)
        self.default_rel = default_rel
        self.links = {}
        self.page = None

    def add_link(self, rel, href):
        self.links[rel] = {'href': href}
        return self

    def to_dict(self):
        embedded = {}
        for resource in self.resources:
            rel = getattr(resource, 'collection_rel', None) or self.default_rel
            embedded.setdefault(rel, []).append(_render(resource))
        body = {'_embedded': embedded}
        if self.links:
            body['_links'] = dict(self.links)
        if self.page is not None:
            body['page'] = dict(self.page)
        return body


def create_resources(resources, default_rel=None):
    """Collection for a non-empty list, None otherwise (rendered as 204)"""
    if not resources:
        return None
    return CollectionResource(resources, default_rel=default_rel)


def _render(value):
    if isinstance(value, (HalResource, CollectionResource)):
        return value.to_dict()
    if isinstance(value, list):
        return [_render(item) for item in value]
    return value
