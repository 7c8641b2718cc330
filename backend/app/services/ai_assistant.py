from app.schemas.ai import AnalysisPayload

BASE_HEALTH_SCORE = 85


class FermentationAIAssistant:
    """Rules-based progress analysis; used directly or when no LLM is configured."""

    @staticmethod
    def analyze_progress(data: dict[str, object]) -> AnalysisPayload:
        insights: list[str] = []
        recommendations: list[str] = []
        alerts: list[str] = []
        health_score = BASE_HEALTH_SCORE

        ph_level = data.get("ph_level")
        brix_level = data.get("brix_level")
        temperature = data.get("temperature")

        if isinstance(ph_level, (int, float)):
            if ph_level < 3.5:
                insights.append("pH is quite low, indicating strong acidity.")
                recommendations.append("Monitor for over-fermentation")
                health_score -= 10
            elif ph_level > 5.0:
                insights.append("pH is elevated, fermentation may be slow.")
                recommendations.append("Check SCOBY health and temperature")
                health_score -= 15
            else:
                insights.append("pH levels look healthy for fermentation.")

            if ph_level > 4.0:
                alerts.append("pH is above 4.0; the batch is not yet safe to bottle.")

        if isinstance(brix_level, (int, float)):
            if brix_level < 4:
                insights.append("Low sugar content suggests fermentation is progressing well.")
                recommendations.append("Consider testing for alcohol content")
            elif brix_level > 10:
                insights.append("High sugar content indicates early fermentation stage.")
                recommendations.append("Continue monitoring - expect more activity")

        if isinstance(temperature, (int, float)):
            if temperature < 68:
                insights.append("Temperature is low - fermentation may be slow.")
                recommendations.append("Consider moving to warmer location")
                health_score -= 5
            elif temperature > 78:
                insights.append("Temperature is high - risk of off-flavors.")
                recommendations.append("Move to cooler location")
                health_score -= 10

        if not insights:
            insights.append("Fermentation parameters look balanced. Continue monitoring progress.")

        return AnalysisPayload(
            health_score=health_score,
            analysis=" ".join(insights),
            recommendations=recommendations,
            alerts=alerts,
        )
