"""HTML for the sandboxed calculator frame and for inline error blocks."""

from __future__ import annotations

from jinja2.sandbox import SandboxedEnvironment

from desmos_graph.config.defaults import DEFAULT_ORIGIN
from desmos_graph.renderer.channel import COMPLETION_TAG
from desmos_graph.renderer.commands import RenderJob

DESMOS_API_URL = (
    "https://www.desmos.com/api/v1.6/calculator.js?apiKey=dcb31709b452b1cf9dc26972add0fda6"
)

CALCULATOR_OPTIONS = {
    "settingsMenu": False,
    "expressions": False,
    "lockViewPort": True,
    "zoomButtons": False,
    "trace": False,
}

_jinja_env = SandboxedEnvironment(autoescape=True, keep_trailing_newline=True)

# Job data reaches the page only through |tojson, never as raw script text
_CALCULATOR_PAGE = """\
<html>
<head><script src="{{ api_url }}"></script></head>
<body>
<div id="calculator" style="width: {{ job.viewport.width }}px; height: {{ job.viewport.height }}px;"></div>
<script>
    const job = {{ job_data|tojson }};
    const tag = {{ tag|tojson }};
    const origin = {{ origin|tojson }};

    const calculator = Desmos.GraphingCalculator(
        document.getElementById("calculator"), {{ options|tojson }}
    );
    calculator.setMathBounds({
        left: job.viewport.left,
        right: job.viewport.right,
        top: job.viewport.top,
        bottom: job.viewport.bottom,
    });

    job.commands.forEach((command) => {
        const expression = { latex: command.latex };
        if (command.line_style) expression.lineStyle = Desmos.Styles[command.line_style];
        if (command.point_style) expression.pointStyle = Desmos.Styles[command.point_style];
        if (command.color) expression.color = Desmos.Colors[command.color] || command.color;
        calculator.setExpression(expression);
    });

    calculator.observe("expressionAnalysis", () => {
        for (const id in calculator.expressionAnalysis) {
            const analysis = calculator.expressionAnalysis[id];
            if (analysis.isError) {
                parent.postMessage({ t: tag, d: "error", data: analysis.errorMessage, hash: job.fingerprint }, origin);
            }
        }
    });

    calculator.asyncScreenshot({ showLabels: true, format: "png" }, (data) => {
        document.body.innerHTML = "";
        parent.postMessage({ t: tag, d: "render", data, hash: job.fingerprint }, origin);
    });
</script>
</body>
</html>
"""

_ERROR_BLOCK = """\
<div style="padding: 20px; background-color: #f44336; color: white;">\
<strong>Desmos Graph Error:</strong> {{ message }}</div>"""


def build_calculator_page(
    job: RenderJob,
    origin: str = DEFAULT_ORIGIN,
    api_url: str = DESMOS_API_URL,
) -> str:
    """Render the document the host loads into its isolated frame for one job."""
    template = _jinja_env.from_string(_CALCULATOR_PAGE)
    return template.render(
        job=job,
        job_data=job.model_dump(mode="json"),
        tag=COMPLETION_TAG,
        origin=origin,
        options=CALCULATOR_OPTIONS,
        api_url=api_url,
    )


def render_error_html(message: str) -> str:
    """Error block shown in place of a graph; the message is HTML-escaped."""
    return _jinja_env.from_string(_ERROR_BLOCK).render(message=message)
