"""
Gateway API handlers.

Each handler reads its parameters, calls one TokenGateway operation
and serializes the normalized result. Failures are left to
error_middleware.
"""

from aiohttp import web

from cube.core.models import AuditPayload, SocialsPayload, TrendingPayload
from cube.services.gateway.aggregator import TokenGateway
from cube.utils.formatters import to_trending_row

GATEWAY_KEY = web.AppKey("gateway", TokenGateway)

routes = web.RouteTableDef()


@routes.get("/api/token/{address}", name="token")
async def handle_token(request: web.Request) -> web.Response:
    """
    GET /api/token/{address}

    Returns tokenSupply, largestAccounts, mintAuthority,
    freezeAuthority and liquidity.
    """
    gateway = request.app[GATEWAY_KEY]
    detail = await gateway.get_token_detail(request.match_info["address"].strip())
    return web.json_response(detail.model_dump(mode="json", by_alias=True))


@routes.get("/api/dextools/trending", name="trending")
async def handle_trending(request: web.Request) -> web.Response:
    """
    GET /api/dextools/trending?limit=N

    Returns the top N (default 5) pools as display rows.
    """
    gateway = request.app[GATEWAY_KEY]
    pools = await gateway.get_trending_pools(request.query.get("limit"))
    payload = TrendingPayload(trending=[to_trending_row(pool) for pool in pools])
    return web.json_response(payload.model_dump(mode="json"))


@routes.get("/api/dextools/socials/{contract_address}", name="socials")
async def handle_socials(request: web.Request) -> web.Response:
    """GET /api/dextools/socials/{contract_address}"""
    gateway = request.app[GATEWAY_KEY]
    links = await gateway.get_socials(request.match_info["contract_address"].strip())
    payload = SocialsPayload(socials=links)
    return web.json_response(payload.model_dump(mode="json"))


@routes.get("/api/dextools/audit/{contract_address}", name="audit")
async def handle_audit(request: web.Request) -> web.Response:
    """GET /api/dextools/audit/{contract_address}"""
    gateway = request.app[GATEWAY_KEY]
    report = await gateway.get_audit_report(request.match_info["contract_address"].strip())
    payload = AuditPayload(audit=report)
    return web.json_response(payload.model_dump(mode="json", by_alias=True))
