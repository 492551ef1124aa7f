"""lint-report: paginated PDF reports for technical-debt analyses."""

__version__ = "0.1.0"

from lint_report.models import AnalysisResult, FileAnalysis, Issue, Recommendation  # noqa: F401, E402
from lint_report.render.pdf import ReportRenderError, generate_report, render_pdf  # noqa: F401, E402
