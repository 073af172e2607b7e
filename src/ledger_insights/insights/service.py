"""Insight service: fetch, aggregate, prompt, generate, parse, assemble."""

from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from decimal import Decimal

import structlog

from ledger_insights import parsing, prompts
from ledger_insights.clients.ollama import GenerationError, OllamaClient
from ledger_insights.config import Settings, get_settings
from ledger_insights.domain.dtos import (
    AIInsight,
    BenchmarkComparison,
    CashFlowOptimization,
    CompetitiveAnalysis,
    FinancialHealth,
    InvestmentRecommendation,
    RiskAssessment,
)
from ledger_insights.domain.models import (
    ZERO,
    AnalysisKind,
    BenchmarkEntry,
    FinancialRecord,
    IndustryType,
    RatioSet,
    describe_metric,
)
from ledger_insights.insights import scoring
from ledger_insights.insights.fallbacks import cash_flow_fallback
from ledger_insights.insights.pipeline import PipelineRun, PipelineStage
from ledger_insights.metrics import (
    aggregate,
    calculate_cash_flow_metrics,
    calculate_key_metrics,
    calculate_ratios,
)
from ledger_insights.providers import (
    BenchmarkProvider,
    DocumentNotFoundError,
    DocumentProvider,
    NoFinancialDataError,
)

logger = structlog.get_logger(__name__)

MAX_RUNWAY_MONTHS = Decimal("120")
CASH_FLOW_CONTEXT = "General business operations"
INVESTMENT_INDUSTRY = "General"


class InsightService:
    """Assembles typed insight results for documents and record sets.

    Provider failures always propagate. Generation failures propagate unless
    the analysis kind is listed in ``settings.fallback_analyses``, in which
    case a fallback result is returned instead.
    """

    def __init__(
        self,
        client: OllamaClient,
        documents: DocumentProvider,
        benchmarks: BenchmarkProvider,
        settings: Settings | None = None,
    ):
        settings = settings or get_settings()
        self._client = client
        self._documents = documents
        self._benchmarks = benchmarks
        known = {k.value: k for k in AnalysisKind}
        self._fallback_kinds = frozenset(
            known[name] for name in settings.fallback_analyses if name in known
        )
        self._logger = logger.bind(service="insights")

        # Hooks for external processing of finished runs
        self._run_hooks: list[Callable[[PipelineRun], None]] = []

    @property
    def model_used(self) -> str:
        return self._client.default_model

    def uses_fallback(self, kind: AnalysisKind) -> bool:
        return kind in self._fallback_kinds

    def add_run_hook(self, hook: Callable[[PipelineRun], None]) -> None:
        """Add a hook to be called with every finished run.

        Hooks are called synchronously once the request's run is assembled
        or has failed.

        Args:
            hook: Function that receives each finished run.
        """
        self._run_hooks.append(hook)

    def remove_run_hook(self, hook: Callable[[PipelineRun], None]) -> None:
        """Remove a run hook."""
        if hook in self._run_hooks:
            self._run_hooks.remove(hook)

    def _notify(self, run: PipelineRun) -> None:
        for hook in self._run_hooks:
            try:
                hook(run)
            except Exception as e:
                run.logger.error("run_hook_error", error=str(e))

    # ------------------------------------------------------------------
    # Pipeline plumbing
    # ------------------------------------------------------------------

    @contextmanager
    def _pipeline(self, kind: AnalysisKind | str, document_id: int | None = None) -> Iterator[PipelineRun]:
        name = kind.value if isinstance(kind, AnalysisKind) else kind
        run = PipelineRun(name, document_id)
        # Parser and client events inherit the request context
        with structlog.contextvars.bound_contextvars(analysis=name, document_id=document_id):
            run.logger.info("insight_requested")
            try:
                yield run
            except Exception as e:
                run.fail(e)
                self._notify(run)
                raise
            run.logger.info(
                "insight_assembled", elapsed_ms=run.elapsed_ms, fallback=run.used_fallback
            )
            self._notify(run)

    async def _load_records(self, document_id: int) -> list[FinancialRecord]:
        records, found = await self._documents.get_records_for_document(document_id)
        if not found:
            raise DocumentNotFoundError(document_id)
        if not records:
            raise NoFinancialDataError(document_id=document_id)
        return records

    async def _generate(self, run: PipelineRun, prompt: str, kind: AnalysisKind | None = None) -> str | None:
        """Call the model; ``None`` means generation failed and a fallback applies."""
        run.advance(PipelineStage.GENERATING)
        try:
            return await self._client.generate(prompt)
        except GenerationError as e:
            if kind is None or not self.uses_fallback(kind):
                raise
            run.used_fallback = True
            run.logger.warning(
                "generation_fallback_used",
                error=str(e),
                error_type=type(e).__name__,
                attempts=e.attempts,
            )
            return None

    @staticmethod
    def _require_records(records: Sequence[FinancialRecord]) -> None:
        if not records:
            raise NoFinancialDataError("Financial data cannot be empty")

    @staticmethod
    def _require_text(value: str, what: str) -> None:
        if not value or not value.strip():
            raise ValueError(f"{what} cannot be empty")

    # ------------------------------------------------------------------
    # Document insights
    # ------------------------------------------------------------------

    async def generate_comprehensive_insights(
        self, document_id: int, analysis_type: AnalysisKind | str = AnalysisKind.GENERAL
    ) -> AIInsight:
        """Full insight for one analysis kind; unknown kinds use the general prompt."""
        kind = AnalysisKind.parse(analysis_type)
        with self._pipeline(kind, document_id) as run:
            records = await self._load_records(document_id)
            document_name = await self._documents.get_document_name(document_id)

            run.advance(PipelineStage.AGGREGATING)
            summary = aggregate(records)
            ratios = calculate_ratios(summary)

            run.advance(PipelineStage.PROMPTING)
            prompt = prompts.build_prompt(summary, ratios, kind)

            response = await self._generate(run, prompt, kind) or ""

            run.advance(PipelineStage.PARSING)
            insight = AIInsight(
                document_id=document_id,
                document_name=document_name,
                analysis_type=kind.value,
                title=f"{kind.value} Analysis",
                summary=parsing.extract_summary(response),
                detailed_analysis=response,
                key_findings=tuple(parsing.extract_key_findings(response)),
                recommendations=tuple(parsing.extract_recommendations(response)),
                risk_factors=tuple(parsing.extract_risk_factors(response)),
                opportunities=tuple(parsing.extract_opportunities(response)),
                health_score=scoring.health_score(summary, ratios),
                risk_level=scoring.risk_level(summary, ratios),
                execution_time_ms=run.elapsed_ms,
                model_used=self.model_used,
            )
            run.advance(PipelineStage.ASSEMBLED)
            return insight

    async def assess_financial_health(self, document_id: int) -> FinancialHealth:
        kind = AnalysisKind.HEALTH_CHECK
        with self._pipeline(kind, document_id) as run:
            records = await self._load_records(document_id)

            run.advance(PipelineStage.AGGREGATING)
            summary = aggregate(records)
            ratios = calculate_ratios(summary)

            run.advance(PipelineStage.PROMPTING)
            prompt = prompts.build_prompt(summary, ratios, kind)

            response = await self._generate(run, prompt, kind) or ""

            run.advance(PipelineStage.PARSING)
            overall = scoring.health_score(summary, ratios)
            health = FinancialHealth(
                overall_score=overall,
                profitability_score=scoring.profitability_score(ratios),
                liquidity_score=scoring.liquidity_score(ratios),
                efficiency_score=scoring.efficiency_score(summary),
                stability_score=scoring.stability_score(summary),
                overall_rating=scoring.health_rating(overall),
                strengths=tuple(parsing.extract_strengths(response)[:3]),
                weaknesses=tuple(parsing.extract_risk_factors(response)[:3]),
                priorities=tuple(parsing.extract_priorities(response)[:3]),
                execution_time_ms=run.elapsed_ms,
                model_used=self.model_used,
            )
            run.advance(PipelineStage.ASSEMBLED)
            return health

    async def assess_risks(self, document_id: int) -> RiskAssessment:
        kind = AnalysisKind.RISK_ANALYSIS
        with self._pipeline(kind, document_id) as run:
            records = await self._load_records(document_id)

            run.advance(PipelineStage.AGGREGATING)
            summary = aggregate(records)
            ratios = calculate_ratios(summary)

            run.advance(PipelineStage.PROMPTING)
            prompt = prompts.build_prompt(summary, ratios, kind)

            response = await self._generate(run, prompt, kind) or ""

            run.advance(PipelineStage.PARSING)
            level = scoring.risk_level(summary, ratios)
            assessment = RiskAssessment(
                risk_level=level,
                risk_score=scoring.risk_score(level),
                risks=scoring.risk_items(parsing.extract_risk_factors(response), summary),
                mitigation_strategies=tuple(parsing.extract_recommendations(response)),
                execution_time_ms=run.elapsed_ms,
                model_used=self.model_used,
            )
            run.advance(PipelineStage.ASSEMBLED)
            return assessment

    async def _suggestions(self, document_id: int, kind: AnalysisKind) -> list[str]:
        with self._pipeline(kind, document_id) as run:
            records = await self._load_records(document_id)

            run.advance(PipelineStage.AGGREGATING)
            summary = aggregate(records)
            ratios = calculate_ratios(summary)

            run.advance(PipelineStage.PROMPTING)
            prompt = prompts.build_prompt(summary, ratios, kind)

            response = await self._generate(run, prompt, kind) or ""

            run.advance(PipelineStage.PARSING)
            suggestions = parsing.extract_key_findings(response)
            run.advance(PipelineStage.ASSEMBLED)
            return suggestions

    async def generate_optimization_suggestions(self, document_id: int) -> list[str]:
        return await self._suggestions(document_id, AnalysisKind.OPTIMIZATION)

    async def generate_growth_strategies(self, document_id: int) -> list[str]:
        return await self._suggestions(document_id, AnalysisKind.GROWTH)

    # ------------------------------------------------------------------
    # Benchmarking, investment and cash flow
    # ------------------------------------------------------------------

    @staticmethod
    def _compare(name: str, entry: BenchmarkEntry, company: RatioSet) -> BenchmarkComparison:
        company_value = company.get_or_zero(name)
        variance = scoring.variance_percentage(company_value, entry.industry_average)
        rating = scoring.performance_rating(variance)
        return BenchmarkComparison(
            metric_name=name,
            company_value=company_value,
            industry_average=entry.industry_average,
            industry_median=entry.industry_median,
            performance_rating=rating,
            percentile_ranking=scoring.percentile_ranking(company_value, entry),
            variance_from_average=company_value - entry.industry_average,
            variance_percentage=variance,
            metric_description=entry.description or describe_metric(name),
            recommendation=scoring.metric_recommendation(name, rating),
        )

    async def perform_industry_benchmarking(
        self, document_id: int, industry: IndustryType | str
    ) -> CompetitiveAnalysis:
        """Compare a document's key metrics with one industry's benchmarks."""
        kind = AnalysisKind.INDUSTRY_BENCHMARKING
        industry_name = industry.value if isinstance(industry, IndustryType) else str(industry)
        with self._pipeline(kind, document_id) as run:
            records = await self._load_records(document_id)
            document_name = await self._documents.get_document_name(document_id)
            benchmarks = await self._benchmarks.get_benchmarks_for_industry(industry_name)

            run.advance(PipelineStage.AGGREGATING)
            company = calculate_key_metrics(records)
            comparisons = tuple(
                self._compare(name, entry, company) for name, entry in benchmarks.items()
            )
            positioning = scoring.competitive_positioning(comparisons)

            run.advance(PipelineStage.PROMPTING)
            prompt = prompts.build_benchmark_prompt(
                company,
                industry_name,
                {name: entry.industry_average for name, entry in benchmarks.items()},
            )

            response = await self._generate(run, prompt, kind) or ""

            run.advance(PipelineStage.PARSING)
            analysis = CompetitiveAnalysis(
                document_id=document_id,
                document_name=document_name,
                industry=industry_name,
                benchmarks=comparisons,
                positioning=positioning,
                key_insights=tuple(parsing.extract_key_insights(response)),
                recommendations=tuple(parsing.extract_recommendations(response)),
                industry_trends=tuple(parsing.extract_industry_trends(response)),
                executive_summary=parsing.extract_executive_summary(response),
                execution_time_ms=run.elapsed_ms,
                model_used=self.model_used,
            )
            run.advance(PipelineStage.ASSEMBLED)
            return analysis

    async def generate_investment_advice(
        self, document_id: int, risk_tolerance: str = "Moderate"
    ) -> InvestmentRecommendation:
        kind = AnalysisKind.INVESTMENT_ADVICE
        with self._pipeline(kind, document_id) as run:
            records = await self._load_records(document_id)

            run.advance(PipelineStage.AGGREGATING)
            company = calculate_key_metrics(records)

            run.advance(PipelineStage.PROMPTING)
            prompt = prompts.build_investment_prompt(company, INVESTMENT_INDUSTRY, risk_tolerance)

            response = await self._generate(run, prompt, kind) or ""

            run.advance(PipelineStage.PARSING)
            recommendation = InvestmentRecommendation(
                document_id=document_id,
                risk_tolerance=risk_tolerance,
                recommendation=parsing.extract_investment_rating(response),
                confidence_level=parsing.extract_confidence_level(response),
                time_horizon=parsing.extract_time_horizon(response),
                expected_returns=parsing.extract_expected_returns(response),
                key_factors=tuple(parsing.extract_key_factors(response)),
                risks=tuple(parsing.extract_risk_factors(response)),
                alternatives=tuple(parsing.extract_alternatives(response)),
                execution_time_ms=run.elapsed_ms,
                model_used=self.model_used,
            )
            run.advance(PipelineStage.ASSEMBLED)
            return recommendation

    async def optimize_cash_flow(self, document_id: int) -> CashFlowOptimization:
        """Cash-flow plan; returns the fixed fallback plan when generation fails and fallback is enabled."""
        kind = AnalysisKind.CASH_FLOW_OPTIMIZATION
        with self._pipeline(kind, document_id) as run:
            records = await self._load_records(document_id)

            run.advance(PipelineStage.AGGREGATING)
            metrics = calculate_cash_flow_metrics(records)

            run.advance(PipelineStage.PROMPTING)
            prompt = prompts.build_cash_flow_prompt(metrics, CASH_FLOW_CONTEXT)

            response = await self._generate(run, prompt, kind)
            if response is None:
                run.advance(PipelineStage.ASSEMBLED)
                return cash_flow_fallback(document_id, run.elapsed_ms, self.model_used)

            run.advance(PipelineStage.PARSING)
            plan = CashFlowOptimization(
                document_id=document_id,
                current_cash_position=max(ZERO, metrics["CashPosition"]),
                monthly_burn_rate=max(ZERO, metrics["BurnRate"]),
                runway_months=min(max(ZERO, metrics["RunwayMonths"]), MAX_RUNWAY_MONTHS),
                immediate_actions=tuple(parsing.extract_immediate_actions(response)),
                short_term_improvements=tuple(parsing.extract_short_term_improvements(response)),
                long_term_strategies=tuple(parsing.extract_long_term_strategies(response)),
                working_capital_optimizations=tuple(parsing.extract_working_capital_optimizations(response)),
                cash_generation_strategies=tuple(parsing.extract_cash_generation_strategies(response)),
                risk_mitigations=tuple(parsing.extract_risk_mitigations(response)),
                implementation_roadmap=tuple(parsing.extract_implementation_roadmap(response)),
                success_metrics=tuple(parsing.extract_success_metrics(response)),
                execution_time_ms=run.elapsed_ms,
                model_used=self.model_used,
            )
            run.advance(PipelineStage.ASSEMBLED)
            return plan

    # ------------------------------------------------------------------
    # Questions
    # ------------------------------------------------------------------

    async def answer_custom_question(self, document_id: int, question: str) -> str:
        self._require_text(question, "Question")
        with self._pipeline("CustomQuestion", document_id) as run:
            records = await self._load_records(document_id)

            run.advance(PipelineStage.AGGREGATING)
            summary = aggregate(records)

            run.advance(PipelineStage.PROMPTING)
            prompt = prompts.custom_question_prompt(question, summary)

            answer = await self._generate(run, prompt) or ""
            run.advance(PipelineStage.ASSEMBLED)
            return answer

    async def answer_with_context(
        self, document_id: int, question: str, history: Sequence[str]
    ) -> str:
        """Answer a follow-up question using the last few conversation messages."""
        self._require_text(question, "Question")
        with self._pipeline("ContextQuestion", document_id) as run:
            records = await self._load_records(document_id)

            run.advance(PipelineStage.AGGREGATING)
            summary = aggregate(records)

            run.advance(PipelineStage.PROMPTING)
            prompt = prompts.context_question_prompt(question, summary, history)

            answer = await self._generate(run, prompt) or ""
            run.advance(PipelineStage.ASSEMBLED)
            return answer

    # ------------------------------------------------------------------
    # Narrative analyses over record sets
    # ------------------------------------------------------------------

    async def _narrative(self, name: str, prompt: str) -> str:
        with self._pipeline(name) as run:
            run.advance(PipelineStage.PROMPTING)
            text = await self._generate(run, prompt) or ""
            run.advance(PipelineStage.ASSEMBLED)
            return text

    async def generate_summary(self, records: list[FinancialRecord]) -> str:
        self._require_records(records)
        return await self._narrative("Summary", prompts.financial_summary_prompt(records))

    async def analyze_trends(self, records: list[FinancialRecord], period: str) -> str:
        self._require_records(records)
        return await self._narrative("Trends", prompts.trend_analysis_prompt(records, period))

    async def detect_anomalies(self, records: list[FinancialRecord]) -> str:
        self._require_records(records)
        return await self._narrative("Anomalies", prompts.anomaly_detection_prompt(records))

    async def analyze_ratios(self, ratios: dict[str, Decimal]) -> str:
        if not ratios:
            raise ValueError("Ratios cannot be empty")
        return await self._narrative("Ratios", prompts.ratio_analysis_prompt(ratios))

    async def compare_periods(
        self, current: list[FinancialRecord], previous: list[FinancialRecord]
    ) -> str:
        self._require_records(current)
        self._require_records(previous)
        return await self._narrative("Comparison", prompts.comparison_prompt(current, previous))

    async def analyze_cash_flow(self, records: list[FinancialRecord]) -> str:
        self._require_records(records)
        return await self._narrative("CashFlow", prompts.cash_flow_analysis_prompt(records))

    async def generate_forecast(self, records: list[FinancialRecord], periods_ahead: int) -> str:
        self._require_records(records)
        if periods_ahead <= 0:
            raise ValueError("Periods ahead must be greater than zero")
        return await self._narrative("Forecast", prompts.forecasting_prompt(records, periods_ahead))

    async def custom_analysis(self, question: str, records: list[FinancialRecord]) -> str:
        self._require_text(question, "Question")
        self._require_records(records)
        return await self._narrative("CustomAnalysis", prompts.custom_analysis_prompt(question, records))

    async def generate_comprehensive_report(self, records: list[FinancialRecord]) -> str:
        """Summary, year-to-date trends, anomalies and ratio analysis in one text."""
        self._require_records(records)

        summary = await self.generate_summary(records)
        trends = await self.analyze_trends(records, "YTD")
        anomalies = await self.detect_anomalies(records)
        ratios = await self.analyze_ratios(calculate_key_metrics(records))

        return "\n".join(
            [
                "=== Comprehensive Financial Insights ===",
                "SUMMARY:",
                summary,
                "",
                "TRENDS:",
                trends,
                "",
                "ANOMALIES:",
                anomalies,
                "",
                "RATIO ANALYSIS:",
                ratios,
                "",
            ]
        )
