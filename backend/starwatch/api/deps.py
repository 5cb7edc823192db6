from fastapi import Request

from starwatch.services.data_service import DataService


def get_data_service(request: Request) -> DataService:
    """The DataService built in the application lifespan."""
    return request.app.state.data_service
