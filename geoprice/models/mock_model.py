from .base import InsightGenerator
from ..schemas import InsightRequest

class MockInsights(InsightGenerator):
    """
    Deterministic stand-in for the text-generation service. Echoes the
    summary lines back as a short report so tests and offline runs get stable
    output.
    """
    name = "mock"

    async def generate(self, request: InsightRequest) -> str:
        stats = [
            line.lstrip("- ").strip()
            for line in request.dataset_summary.splitlines()
            if line.strip()
        ]
        out = ["Market snapshot:"]
        out += [f"• {s}" for s in stats]
        if request.user_prompt:
            out.append(f"Requested focus: {request.user_prompt}")
        out.append("Offline summary; configure INSIGHTS_PROVIDER for generated analysis.")
        return "\n".join(out)
