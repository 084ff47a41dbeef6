from flask import request

MAX_PAGE_SIZE = 100


def paginate(query):
    page = request.args.get("page", 1, type=int)
    page_size = min(request.args.get("pageSize", 20, type=int), MAX_PAGE_SIZE)

    pagination = query.paginate(page=page, per_page=page_size, error_out=False)

    return {
        "items": pagination.items,
        "total": pagination.total,
        "page": page,
        "pages": pagination.pages,
    }
