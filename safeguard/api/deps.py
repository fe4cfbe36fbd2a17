"""Shared FastAPI dependencies."""
from __future__ import annotations

from fastapi import Depends

from ..core.config import AnalysisMode, AppSettings, get_settings
from ..services.analysis_flow import (
    AnalysisFlow,
    Analyzer,
    LocalRelayAnalyzer,
    MockAnalyzer,
    RelayClientAnalyzer,
)
from ..services.gateway import AIGatewayClient
from ..services.relay import ModerationRelay


def get_gateway_client(settings: AppSettings = Depends(get_settings)) -> AIGatewayClient:
    return AIGatewayClient(settings)


def get_relay(gateway: AIGatewayClient = Depends(get_gateway_client)) -> ModerationRelay:
    return ModerationRelay(gateway)


def get_analyzer(
    settings: AppSettings = Depends(get_settings),
    relay: ModerationRelay = Depends(get_relay),
) -> Analyzer:
    if settings.analysis_mode == AnalysisMode.MOCK:
        return MockAnalyzer()
    if settings.relay_url:
        return RelayClientAnalyzer(settings.relay_url)
    return LocalRelayAnalyzer(relay)


def get_analysis_flow(analyzer: Analyzer = Depends(get_analyzer)) -> AnalysisFlow:
    return AnalysisFlow(analyzer)
