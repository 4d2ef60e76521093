"""Sample question catalog for the Kubernetes suitability assessment.

Seeded into an empty database at startup. Each question has an ID, category,
prompt, integer weight, and four options scored 0-10 points.

Categories:
    Architecture  : statelessness and process model
    Configuration : externalised configuration
    Observability : logging behaviour
    Persistence   : how and where data is stored
    Scalability   : horizontal scaling support
"""

from kube_suitability.core.models.domain import Application, Option, Question

SAMPLE_QUESTIONS: list[Question] = [
    Question(
        question_id="q1",
        text="Is the application stateless?",
        category="Architecture",
        weight=5,
        options=(
            Option(option_id="q1_a1", text="Yes, completely stateless", points=10),
            Option(option_id="q1_a2", text="Mostly stateless with minimal state", points=7),
            Option(option_id="q1_a3", text="Partially stateless", points=4),
            Option(option_id="q1_a4", text="Heavily stateful", points=1),
        ),
    ),
    Question(
        question_id="q2",
        text="Does the application use external configuration?",
        category="Configuration",
        weight=3,
        options=(
            Option(option_id="q2_a1", text="Yes, all configuration is external", points=10),
            Option(option_id="q2_a2", text="Most configuration is external", points=7),
            Option(option_id="q2_a3", text="Some configuration is external", points=4),
            Option(option_id="q2_a4", text="No, all configuration is internal", points=1),
        ),
    ),
    Question(
        question_id="q3",
        text="How is application logging handled?",
        category="Observability",
        weight=2,
        options=(
            Option(option_id="q3_a1", text="Logs to stdout/stderr", points=10),
            Option(option_id="q3_a2", text="Logs to configurable location", points=7),
            Option(option_id="q3_a3", text="Logs to fixed file location", points=3),
            Option(option_id="q3_a4", text="No logging capability", points=0),
        ),
    ),
    Question(
        question_id="q4",
        text="How does the application store persistent data?",
        category="Persistence",
        weight=4,
        options=(
            Option(
                option_id="q4_a1",
                text="Uses external databases with connection strings",
                points=10,
            ),
            Option(
                option_id="q4_a2",
                text="Uses external storage with configurable location",
                points=7,
            ),
            Option(option_id="q4_a3", text="Uses local filesystem with fixed paths", points=3),
            Option(option_id="q4_a4", text="Embedded database or storage", points=1),
        ),
    ),
    Question(
        question_id="q5",
        text="Does the application support horizontal scaling?",
        category="Scalability",
        weight=5,
        options=(
            Option(option_id="q5_a1", text="Designed for horizontal scaling", points=10),
            Option(
                option_id="q5_a2",
                text="Can scale horizontally with minor changes",
                points=7,
            ),
            Option(
                option_id="q5_a3",
                text="Requires significant changes to scale horizontally",
                points=3,
            ),
            Option(option_id="q5_a4", text="Cannot scale horizontally", points=0),
        ),
    ),
]

SAMPLE_APPLICATION: Application = Application(
    application_id="app1",
    name="Sample Application",
    description="A sample application for testing the assessment tool",
    tags={"language": "Java", "type": "Web Application"},
)

# Convenience mappings for fast lookup
SAMPLE_QUESTIONS_BY_ID: dict[str, Question] = {q.question_id: q for q in SAMPLE_QUESTIONS}

ALL_CATEGORIES: list[str] = [
    "Architecture",
    "Configuration",
    "Observability",
    "Persistence",
    "Scalability",
]
