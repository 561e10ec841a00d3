"""Narrative generation for migration recommendations.

The engine's numbers never depend on anything here. A narrative generator
turns a structured recommendation plus a free-text question into prose for
display; its answer is never parsed back into the recommendation.
"""

import logging
import os
from typing import Any, Optional, Protocol

from openai import AzureOpenAI, OpenAI, OpenAIError

from .config import NarrativeConfig, get_config
from .exceptions import InvalidInventoryError, NarrativeGenerationError
from .schema import MigrationRecommendation

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = """You are an expert Azure Migration Architect with deep knowledge of:
1. On-premises infrastructure assessment
2. Azure services and SKU recommendations
3. Cost optimization strategies
4. Security and compliance requirements
5. Migration best practices

Always provide practical, actionable recommendations with clear justifications.
Focus on cost optimization while maintaining performance and security.
Consider high availability and disaster recovery requirements."""

FOLLOW_UP_INSTRUCTIONS = (
    "Please provide a detailed, specific answer based on this application's context. "
    "If the question is about costs, provide breakdowns. If about timeline, provide phases. "
    "If about risks, be specific to this application's characteristics."
)

SUGGESTED_QUESTIONS = (
    "What about security considerations?",
    "Can you break down the costs?",
    "What migration risks should I know about?",
    "Show me the detailed migration timeline",
)


class NarrativeGenerator(Protocol):
    """Anything that can answer a question given structured context."""

    def generate(self, context: str, question: str) -> str:
        ...


class OpenAINarrativeGenerator:
    """Narrative generator backed by OpenAI or Azure OpenAI chat completions.

    Azure OpenAI is used when an endpoint is configured (or set in
    AZURE_OPENAI_ENDPOINT); otherwise the public OpenAI API is used. The
    client is created on first use so constructing the generator never
    touches the network.
    """

    def __init__(self, config: Optional[NarrativeConfig] = None, client: Any = None):
        self.config = config or get_config().narrative
        self._client = client

    @property
    def provider_name(self) -> str:
        return "azure_openai" if self._azure_endpoint else "openai"

    @property
    def _azure_endpoint(self) -> str:
        return self.config.azure_endpoint or os.environ.get("AZURE_OPENAI_ENDPOINT", "")

    def _get_client(self) -> Any:
        if self._client is not None:
            return self._client

        if self._azure_endpoint:
            api_key = os.environ.get(self.config.azure_api_key_env, "")
            if not api_key:
                raise NarrativeGenerationError(
                    f"Azure OpenAI endpoint configured but {self.config.azure_api_key_env} is not set"
                )
            self._client = AzureOpenAI(
                azure_endpoint=self._azure_endpoint,
                api_key=api_key,
                api_version=self.config.api_version,
                timeout=self.config.timeout_seconds,
                max_retries=self.config.max_retries,
            )
        else:
            api_key = os.environ.get(self.config.openai_api_key_env, "")
            if not api_key:
                raise NarrativeGenerationError(
                    "Please configure either OpenAI or Azure OpenAI credentials: set "
                    f"{self.config.openai_api_key_env}, or AZURE_OPENAI_ENDPOINT and "
                    f"{self.config.azure_api_key_env}"
                )
            self._client = OpenAI(
                api_key=api_key,
                timeout=self.config.timeout_seconds,
                max_retries=self.config.max_retries,
            )

        logger.info("Narrative generator using %s model %s", self.provider_name, self.config.model)
        return self._client

    def generate(self, context: str, question: str) -> str:
        client = self._get_client()
        try:
            response = client.chat.completions.create(
                model=self.config.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": f"{context}\n\nQUESTION: {question}"},
                ],
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
            )
        except OpenAIError as e:
            raise NarrativeGenerationError(f"Language model request failed: {e}") from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise NarrativeGenerationError("Language model returned an empty response")
        return content


def build_recommendation_context(recommendation: MigrationRecommendation) -> str:
    """Context block describing a previous analysis, for follow-up questions."""
    return (
        f"Based on the previous analysis for {recommendation.application_name}, "
        "please answer this follow-up question.\n"
        "\n"
        "CONTEXT FROM PREVIOUS ANALYSIS:\n"
        f"- Application: {recommendation.application_name}\n"
        f"- Servers: {recommendation.current_state.total_servers}\n"
        f"- Migration Complexity: {recommendation.complexity.overall_complexity}\n"
        f"- Estimated Cost: ${recommendation.estimated_costs.total_monthly_cost:.2f}/month\n"
        f"- Timeline: {recommendation.complexity.estimated_timeframe}\n"
        "\n"
        f"{FOLLOW_UP_INSTRUCTIONS}"
    )


def summarize_recommendation(recommendation: MigrationRecommendation) -> str:
    """Markdown summary of an analysis with suggested follow-up questions.

    Memory is summed per server in whole GB, so it can be lower than the
    aggregate used for sizing.
    """
    servers = recommendation.current_state.server_specifications
    total_cores = sum(server.cores for server in servers)
    total_memory_gb = sum(server.memory_mb // 1024 for server in servers)

    lines = [
        "**Current State:**",
        f"- Servers: {recommendation.current_state.total_servers}",
        f"- Total Cores: {total_cores}",
        f"- Total Memory: {total_memory_gb}GB",
        "",
        "**Azure Recommendations:**",
        f"- Migration Complexity: {recommendation.complexity.overall_complexity}",
        f"- Estimated Timeline: {recommendation.complexity.estimated_timeframe}",
        f"- Monthly Cost Estimate: ${recommendation.estimated_costs.total_monthly_cost:.2f}",
        "",
        "**Ask me questions like:**",
    ]
    lines.extend(f'- "{question}"' for question in SUGGESTED_QUESTIONS)
    return "\n".join(lines)


def answer_question(
    generator: NarrativeGenerator,
    recommendation: MigrationRecommendation,
    question: str,
) -> str:
    """Answer a follow-up question about a recommendation.

    Raises:
        InvalidInventoryError: If the question is blank.
        NarrativeGenerationError: If the generator fails.
    """
    if not question or not question.strip():
        raise InvalidInventoryError("Question cannot be empty")

    logger.info("Processing follow-up question: %s", question)
    return generator.generate(build_recommendation_context(recommendation), question.strip())
