from fastapi import Request

from contracts_api.services import ContractGateway


def get_gateway(request: Request) -> ContractGateway:
    """Gateway dependency."""
    return request.app.state.gateway
