from fastapi import Request

from membership_api.repositories.store import Store


def get_store(request: Request) -> Store:
    """
    Return the store created by the app lifespan.

    Tests replace it through `app.dependency_overrides[get_store]`.
    """
    return request.app.state.store
