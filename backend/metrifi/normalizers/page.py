def normalize_page(page, link=None, fields=None):
    """
    Serialize a page for the generic record endpoints.

    ``fields`` holds the page's custom-field values; pass None to leave
    the ``acf`` key out.
    """
    data = {
        "id": page.id,
        "title": page.title,
        "slug": page.slug,
        "content": page.content,
        "status": page.status,
        "type": page.type,
        "link": link,
        "created_at": page.created_at.isoformat() if page.created_at else None,
        "updated_at": page.updated_at.isoformat() if page.updated_at else None,
    }

    if fields is not None:
        data["acf"] = fields

    return data
