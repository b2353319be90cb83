"""Client shell: routes between the survey page and the recipe results page.

Pages share one layout (navigation bar plus content container). The results
page shows fixed placeholder results until real recipe search exists.
"""

from flask import Blueprint, current_app, redirect, render_template_string, url_for

shell_bp = Blueprint("shell", __name__)


PLACEHOLDER_RESULTS = [
    {
        "name": "Result 1",
        "description": "One",
        "picture": "https://valentinascorner.com/wp-content/uploads/2020/07/Shrimp-Ceviche-Recipe-3.jpg",
    },
    {
        "name": "Result 2",
        "description": "Two",
        "picture": "https://therecipecritic.com/wp-content/uploads/2015/10/porcupinemeatballs-650x975.jpg",
    },
    {
        "name": "Result 3",
        "description": "Three",
        "picture": "https://sweetandsavorymeals.com/wp-content/uploads/2019/05/Grilled-Eggplant-Recipe-4.jpg",
    },
]


LAYOUT_HTML = """
<!DOCTYPE html>
<html>
<head>
    <title>Recipe Finder - {{ title }}</title>
    <style>
        body {
            font-family: system-ui, -apple-system, sans-serif;
            margin: 0;
        }
        nav {
            background: #3f51b5;
            padding: 15px 20px;
        }
        nav a {
            color: white;
            margin-right: 20px;
            text-decoration: none;
        }
        .container {
            max-width: 1280px;
            margin: 0 auto;
            padding: 20px;
        }
        .result {
            display: inline-block;
            width: 300px;
            margin: 10px;
            vertical-align: top;
        }
        .result img { width: 100%; border-radius: 4px; }
    </style>
</head>
<body>
    <nav>
        <a href="{{ url_for('shell.survey') }}">Survey</a>
        <a href="{{ url_for('shell.recipe_results') }}">Recipe Results</a>
    </nav>
    <div class="container">
        {% block content %}{% endblock %}
    </div>
</body>
</html>
"""

SURVEY_HTML = """
{% extends layout %}
{% block content %}
<h1>Survey</h1>
<p>Tell us what you like to cook.</p>
{% endblock %}
"""

RESULTS_HTML = """
{% extends layout %}
{% block content %}
<h1>Recipe Results</h1>
{% for result in results %}
<div class="result">
    <img src="{{ result.picture }}" alt="{{ result.name }}" />
    <h2>{{ result.name }}</h2>
    <p>{{ result.description }}</p>
</div>
{% endfor %}
{% endblock %}
"""


def _render(page: str, title: str, **context):
    layout = current_app.jinja_env.from_string(LAYOUT_HTML)
    return render_template_string(page, layout=layout, title=title, **context)


@shell_bp.route("/", methods=["GET"])
def index():
    """Send visitors to the survey page."""
    return redirect(url_for("shell.survey"))


@shell_bp.route("/survey", methods=["GET"])
def survey():
    """Render the survey page."""
    return _render(SURVEY_HTML, title="Survey")


@shell_bp.route("/recipe-results", methods=["GET"])
def recipe_results():
    """Render the placeholder recipe results."""
    return _render(RESULTS_HTML, title="Recipe Results", results=PLACEHOLDER_RESULTS)
