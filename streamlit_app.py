import streamlit as st
import pandas as pd
import plotly.graph_objects as go
from typing import Dict, Any, List
import os
import uuid
from dotenv import load_dotenv
from datetime import date

from advice import AdviceService, AdviceConfig, split_source
from assessment import (
    QUESTIONS,
    max_score,
    total_score,
    category_aggregates,
    security_level,
    weakest_categories,
    security_insights,
    compare_to_baselines,
    answer_severity,
)
from assessment.config import SECURITY_RESOURCES, COMPARISON_BASELINES, get_security_incidents
from assessment.session import (
    new_state,
    current_index,
    is_complete,
    record_answer,
    skip_question,
    go_back,
    reset,
    begin_request,
    is_current,
)
from prompts.advice_prompts import AdviceMessages
from recommendations import (
    analyze_risk_patterns,
    derive_recommendations,
    pattern_explanation,
    priority_description,
)
from state import AssessmentState
from utils.export_utils import export_text, export_filename, export_csv, category_frame

# Load environment variables
load_dotenv()

from operation.healthcheck import CompositeHealthCheck, InferenceHealthCheck, HealthStatus
from operation.monitoring.metrics import get_metrics_registry
from operation.logging import get_logger, set_correlation_id, setup_logging_from_env

logger = get_logger(__name__)

# Page configuration
st.set_page_config(
    page_title="PrivScore - Security Self-Assessment",
    page_icon="🛡️",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.markdown("""
<style>
    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}

    .main-header {
        background: linear-gradient(135deg, #1e3a8a 0%, #3b82f6 100%);
        padding: 1.5rem 2rem;
        border-radius: 1rem;
        color: white;
        margin-bottom: 1.5rem;
    }
    .main-header h1 { margin: 0; font-size: 2.2rem; }
    .main-header p { margin: 0.25rem 0 0 0; opacity: 0.9; }

    .level-card {
        padding: 1.25rem;
        border-radius: 0.75rem;
        border-left: 6px solid var(--level-color);
        background: #f8fafc;
        margin-bottom: 1rem;
    }

    .rec-card {
        padding: 0.9rem 1.1rem;
        border-radius: 0.5rem;
        background: #ffffff;
        border: 1px solid #e5e7eb;
        margin-bottom: 0.75rem;
    }
    .badge {
        display: inline-block;
        padding: 0.1rem 0.5rem;
        border-radius: 0.5rem;
        font-size: 0.75rem;
        font-weight: 600;
        color: white;
    }

    .health-indicator {
        display: inline-block;
        width: 10px;
        height: 10px;
        border-radius: 50%;
        margin-right: 0.5rem;
    }
    .health-healthy { background: #10b981; }
    .health-degraded { background: #f59e0b; }
    .health-unhealthy { background: #ef4444; }
</style>
""", unsafe_allow_html=True)

COLOR_HEX = {
    "green": "#10b981",
    "blue": "#3b82f6",
    "yellow": "#f59e0b",
    "orange": "#f97316",
    "red": "#ef4444",
    "gray": "#6b7280",
    "purple": "#8b5cf6",
}

PRIORITY_COLORS = {
    "CRITICAL": "red",
    "HIGH": "orange",
    "MEDIUM": "blue",
    "LOW": "gray",
    "EXCELLENT": "green",
    "MAINTENANCE": "purple",
}


def initialize_session_state():
    """Initialize session state variables"""
    setup_logging_from_env()

    if 'state' not in st.session_state:
        correlation_id = str(uuid.uuid4())
        set_correlation_id(correlation_id)
        state = new_state()
        state["correlation_id"] = correlation_id
        st.session_state.state = state
    else:
        set_correlation_id(st.session_state.state.get("correlation_id"))

    if 'advice_service' not in st.session_state:
        st.session_state.advice_service = AdviceService(AdviceConfig.from_env())

    if 'explanations' not in st.session_state:
        st.session_state.explanations = {}
    if 'advice' not in st.session_state:
        st.session_state.advice = None


def reset_app():
    """Start the assessment over (the last completed score is kept for comparison)"""
    reset(st.session_state.state)
    st.session_state.explanations = {}
    st.session_state.advice = None

# ---------------------------
# Sidebar
# ---------------------------

def render_ai_settings(service: AdviceService):
    """AI settings: the only place the advice configuration changes at runtime"""
    st.markdown("### 🤖 AI Settings")
    config = service.config

    ai_enabled = st.toggle("AI-generated advice", value=config.ai_enabled)
    use_proxy = st.toggle("Use secure proxy", value=config.use_proxy,
                          help="The proxy keeps the provider key on the server.")
    api_key = config.api_key or ""
    if not use_proxy:
        api_key = st.text_input("Hugging Face API key", value=api_key, type="password")

    changes: Dict[str, Any] = {}
    if ai_enabled != config.ai_enabled:
        changes["ai_enabled"] = ai_enabled
    if use_proxy != config.use_proxy:
        changes["use_proxy"] = use_proxy
    if (api_key or None) != config.api_key:
        changes["api_key"] = api_key or None
    if changes:
        service.reconfigure(**changes)
        st.session_state.explanations = {}
        st.session_state.advice = None

    if not service.enabled:
        st.caption(AdviceMessages.ai_disabled())

    if st.button("🧪 Test AI connection", width="stretch"):
        result = service.test_connection()
        message = AdviceMessages.connection_result(
            result["success"], result["mode"], result["message"], result["time_ms"]
        )
        (st.success if result["success"] else st.error)(message)


@st.cache_data(ttl=30, show_spinner=False)
def _run_health_checks_cached(_service: AdviceService, mode: str, enabled: bool) -> Dict[str, Any]:
    """
    Run health checks with caching. ``mode`` and ``enabled`` are part of the
    cache key so a reconfigured service is re-checked.
    """
    composite = CompositeHealthCheck([InferenceHealthCheck(_service)])
    results = composite.check_all()
    return {"results": results, "overall": CompositeHealthCheck.overall_status(results)}


def render_health_check(service: AdviceService):
    """Render health check status in sidebar. Set ENABLE_HEALTH_CHECKS=false to skip."""
    if os.getenv("ENABLE_HEALTH_CHECKS", "true").lower() != "true":
        return

    st.markdown("### 🏥 System Health")
    health = _run_health_checks_cached(service, service.config.mode, service.enabled)
    overall: HealthStatus = health["overall"]
    st.markdown(
        f'<span class="health-indicator health-{overall.value}"></span>{overall.value.title()}',
        unsafe_allow_html=True,
    )
    with st.expander("Details", expanded=False):
        for name, result in health["results"].items():
            response_time = f" {result.response_time_ms:.0f}ms" if result.response_time_ms else ""
            st.markdown(
                f'<span class="health-indicator health-{result.status.value}"></span>'
                f"**{name.title()}:** {result.message}{response_time}",
                unsafe_allow_html=True,
            )


def render_monitoring():
    """Advice pipeline counters and remote call timings"""
    st.markdown("### 📈 Metrics")
    all_metrics = get_metrics_registry().get_all_metrics()
    if not all_metrics:
        st.caption("No metrics yet")
        return

    counters = {k.replace("counter_", ""): v for k, v in all_metrics.items() if k.startswith("counter_")}
    if counters:
        with st.expander("Counters", expanded=False):
            for name, value in counters.items():
                st.write(f"**{name.replace('_', ' ').title()}:** {int(value)}")

    timers = {k.replace("timer_", ""): v for k, v in all_metrics.items() if k.startswith("timer_")}
    if timers:
        with st.expander("Remote call latency", expanded=False):
            for name, stats in timers.items():
                if stats.get("count"):
                    st.write(f"**{name}:** {stats['mean'] * 1000:.0f}ms avg over {stats['count']}")

# ---------------------------
# Quiz
# ---------------------------

def render_header():
    st.markdown("""
    <div class="main-header">
        <h1>🛡️ PrivScore</h1>
        <p>How well are you protected online? Answer a few questions to find out.</p>
    </div>
    """, unsafe_allow_html=True)


def render_question(state: AssessmentState, service: AdviceService):
    index = current_index(state)
    question = QUESTIONS[index]

    st.progress(index / len(QUESTIONS), text=f"Question {index + 1} of {len(QUESTIONS)}")
    st.caption(question.category)
    st.markdown(f"#### {question.prompt}")

    for number, choice in enumerate(question.choices):
        if st.button(choice.label, key=f"q{index}_c{number}", width="stretch"):
            record_answer(state, choice.score)
            st.session_state.last_tip = choice.tip
            st.rerun()

    if st.session_state.get("last_tip") and index > 0:
        st.info(f"💡 {st.session_state.last_tip}")

    with st.expander("❓ Need help? Why does this matter?"):
        if index not in st.session_state.explanations and st.button("Explain this question", key=f"explain_{index}"):
            with st.spinner("Getting an explanation..."):
                token = begin_request(state)
                explanation = service.question_explanation(question)
            if is_current(state, token):
                st.session_state.explanations[index] = explanation
        if index in st.session_state.explanations:
            source, body = split_source(st.session_state.explanations[index])
            st.caption(AdviceMessages.ai_badge() if source == "ai" else AdviceMessages.expert_badge())
            st.write(body)

    col1, col2, col3 = st.columns(3)
    with col1:
        if st.button("⬅️ Back", disabled=index == 0, width="stretch"):
            go_back(state)
            st.session_state.last_tip = None
            st.rerun()
    with col2:
        if st.button("⏭️ Skip", width="stretch"):
            skip_question(state)
            st.session_state.last_tip = None
            st.rerun()
    with col3:
        if st.button("🔄 Restart", width="stretch"):
            reset_app()
            st.rerun()

# ---------------------------
# Results
# ---------------------------

def radar_chart(aggregates) -> go.Figure:
    names = list(aggregates.keys())
    values = [aggregates[name].percentage for name in names]
    fig = go.Figure(data=[
        go.Scatterpolar(
            r=values + values[:1],
            theta=names + names[:1],
            fill="toself",
            name="Your score",
            line_color=COLOR_HEX["blue"],
        )
    ])
    fig.update_layout(
        polar=dict(radialaxis=dict(visible=True, range=[0, 100])),
        showlegend=False,
        height=380,
        margin=dict(l=40, r=40, t=20, b=20),
        template="plotly_white",
    )
    return fig


def comparison_chart(user_percentage: float) -> go.Figure:
    groups = ["You"] + list(COMPARISON_BASELINES.keys())
    values = [round(user_percentage)] + list(COMPARISON_BASELINES.values())
    colors = [COLOR_HEX["blue"]] + [COLOR_HEX["gray"]] * len(COMPARISON_BASELINES)
    fig = go.Figure(data=[go.Bar(x=groups, y=values, marker_color=colors, text=values, textposition="auto")])
    fig.update_layout(
        yaxis=dict(range=[0, 100], title="Score %"),
        height=320,
        margin=dict(l=20, r=20, t=20, b=20),
        template="plotly_white",
    )
    return fig


def render_recommendations(recommendations):
    st.markdown("### 🎯 Top Recommendations")
    for rec in recommendations:
        color = COLOR_HEX[PRIORITY_COLORS.get(rec.priority, "gray")]
        steps = "".join(f"<li>{step}</li>" for step in rec.steps)
        st.markdown(f"""
        <div class="rec-card">
            <span class="badge" style="background:{color}">{rec.priority}</span>
            <strong> {rec.action}</strong>
            <div style="font-size:0.85rem;color:#6b7280">{priority_description(rec.priority)}</div>
            <p>{rec.description}</p>
            <div style="font-size:0.85rem">⏱️ {rec.time_to_implement} &nbsp; 📈 {rec.impact}</div>
            <ol>{steps}</ol>
        </div>
        """, unsafe_allow_html=True)


def render_risk(answers: List[int]):
    risk = analyze_risk_patterns(answers)
    details = risk.details
    st.markdown("### ⚠️ Risk Analysis")
    st.markdown(
        f"**Risk level:** <span class='badge' style='background:{COLOR_HEX[details['color']]}'>"
        f"{risk.risk_level}</span> ({risk.critical_count} critical answers)",
        unsafe_allow_html=True,
    )
    st.caption(f"{details['description']}. {details['action_required']}.")
    for tag in risk.patterns:
        st.write(f"• {pattern_explanation(tag)}")


def render_advice(state: AssessmentState, service: AdviceService, weak_areas: List[str]):
    st.markdown("### 💬 Personalized Advice")
    if st.session_state.advice is None:
        with st.spinner("Generating advice..."):
            token = begin_request(state)
            advice = service.personalized_advice(weak_areas)
        if is_current(state, token):
            st.session_state.advice = advice
    for item in st.session_state.advice or []:
        source, body = split_source(item)
        badge = AdviceMessages.ai_badge() if source == "ai" else AdviceMessages.expert_badge()
        st.markdown(f"**{badge}** {body}")


def render_results(state: AssessmentState, service: AdviceService):
    answers = state["answers"]
    total = total_score(answers)
    maximum = max_score()
    aggregates = category_aggregates(answers)
    level = security_level(total, maximum)
    comparison = compare_to_baselines(total, maximum)
    severity = answer_severity(answers)
    recommendations = derive_recommendations(answers, aggregates=aggregates)

    st.markdown(f"""
    <div class="level-card" style="--level-color:{COLOR_HEX[level.color]}">
        <h2 style="margin:0">{level.title}</h2>
        <p style="margin:0.25rem 0">{level.description}</p>
        <p style="margin:0;font-size:0.9rem;color:#6b7280">{level.insight}</p>
    </div>
    """, unsafe_allow_html=True)

    col1, col2, col3, col4 = st.columns(4)
    previous = state.get("previous_score")
    col1.metric("Score", f"{total}/{maximum}", delta=None if previous is None else total - previous)
    col2.metric("Rank", comparison["rank"])
    col3.metric("Critical answers", severity["critical"])
    col4.metric("Needs improvement", severity["moderate"] + severity["low"])

    for insight in security_insights(aggregates, total, maximum):
        st.write(insight)

    chart_col, compare_col = st.columns(2)
    with chart_col:
        st.markdown("#### Category radar")
        st.plotly_chart(radar_chart(aggregates), width="stretch", config={'displayModeBar': False})
    with compare_col:
        st.markdown("#### Compared to others")
        st.plotly_chart(comparison_chart(comparison["user_score"]), width="stretch",
                        config={'displayModeBar': False})

    st.dataframe(category_frame(aggregates), hide_index=True, width="stretch")

    left, right = st.columns([1.2, 1])
    with left:
        render_recommendations(recommendations)
    with right:
        render_risk(answers)
        weak_areas = [name for name, aggregate in weakest_categories(aggregates) if aggregate.percentage < 100]
        render_advice(state, service, weak_areas)

    with st.expander("📚 Security resources & recent incidents"):
        for resource in SECURITY_RESOURCES:
            st.markdown(f"- [{resource['title']}]({resource['url']})")
        incidents = pd.DataFrame(get_security_incidents())
        st.dataframe(incidents[["date", "title", "severity"]], hide_index=True, width="stretch")

    report = export_text(total, maximum, level, recommendations, aggregates,
                         generated_on=date.today(), advice=st.session_state.advice)
    col1, col2, col3 = st.columns(3)
    with col1:
        st.download_button("📄 Download report", report, file_name=export_filename(date.today()),
                           mime="text/plain", width="stretch")
    with col2:
        st.download_button("📊 Download CSV", export_csv(aggregates),
                           file_name="PrivScore_Categories.csv", mime="text/csv", width="stretch")
    with col3:
        if st.button("🔄 Take it again", type="primary", width="stretch"):
            reset_app()
            st.rerun()


def main():
    """Main Streamlit application"""
    initialize_session_state()
    state = st.session_state.state
    service = st.session_state.advice_service

    with st.sidebar:
        st.markdown("### 🛡️ PrivScore")
        if st.button("🔄 Reset", type="primary", width="stretch"):
            reset_app()
            st.rerun()
        st.markdown("---")
        render_ai_settings(service)
        st.markdown("---")
        render_health_check(service)
        render_monitoring()

    render_header()
    if is_complete(state):
        render_results(state, service)
    else:
        render_question(state, service)

if __name__ == "__main__":
    main()
