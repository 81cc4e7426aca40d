"""FastAPI diagnostics server exposing the runtime environment"""
import time
from typing import Optional
from fastapi import FastAPI
from config import Config
from environment.context import RuntimeContext, runtime_context
from environment.matching import EnvironmentMatcher
from utils.process import ProcessIdentityResolver, process_identity
from logging_config import get_logger
from .middleware import RequestLoggingMiddleware
from .schemas import EnvironmentResponse, MatchRequest, MatchResponse, TagResult


logger = get_logger(__name__)


class DiagnosticsServer:
    """FastAPI server reporting the environment this process is gated on"""

    def __init__(self, config: Config,
                 context: Optional[RuntimeContext] = None,
                 resolver: Optional[ProcessIdentityResolver] = None):
        self.config = config
        self.context = context or runtime_context.initialize(config)
        self.resolver = resolver or process_identity
        self.start_time = time.time()
        self.app = FastAPI(
            title="Environment Diagnostics",
            version=config.service_version,
            docs_url=None,
            redoc_url=None,
            openapi_url=None
        )

        if self.config.enable_request_logging:
            self.app.add_middleware(RequestLoggingMiddleware)

        self._setup_routes()

    def _setup_routes(self):
        """Setup FastAPI routes"""

        @self.app.get('/health')
        def health_check():
            """Health check endpoint"""
            return {
                "status": "healthy",
                "service": self.config.service_name,
                "version": self.config.service_version,
                "uptime_seconds": round(time.time() - self.start_time, 1)
            }

        @self.app.get('/environment', response_model=EnvironmentResponse)
        def get_environment():
            """Current runtime context and process identity"""
            process_id = self.resolver.get()
            return EnvironmentResponse(
                process_id=process_id,
                process_id_strategy=self.resolver.strategy_used,
                **self.context.as_dict()
            )

        @self.app.post('/environment/match', response_model=MatchResponse)
        def match_tags(request: MatchRequest):
            """Evaluate tags against the runtime context"""
            tags = [item.to_tag() for item in request.tags]
            results = [
                TagResult(
                    kind=tag.kind,
                    value=tag.value,
                    unless=tag.unless,
                    matches=EnvironmentMatcher.matches(tag, self.context)
                )
                for tag in tags
            ]
            verdict = EnvironmentMatcher.matches_all(tags, self.context)
            logger.debug("Evaluated environment tags", tags_count=len(results), matches=verdict,
                         event_type="environment_match")
            return MatchResponse(matches=verdict, results=results)

    def get_app(self) -> FastAPI:
        """Get FastAPI application instance"""
        return self.app
