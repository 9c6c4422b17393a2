import streamlit as st
import pandas as pd
import os
import sys
import json
import tempfile
from datetime import datetime

# Ensure src is in path
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from src.graph.graph import app_graph
from src.utils import wizard
from src.utils.budget import format_currency
from src.utils.csv_ingest import InvalidFileTypeError, read_csv_upload
from src.utils.csv_insights import analyze_csv_data
from src.utils.pdf_generator import render_report_pdf
from src.utils.strategy_plots import render_strategy_plots
from src.utils.strategy_report import summarize_strategy

# 1. Page setup
st.set_page_config(
    page_title="Strategic AI Marketing Planner",
    page_icon="🧠",
    layout="wide",
    initial_sidebar_state="collapsed"
)

st.markdown("""
    <style>
    .main {
        background-color: #f8fafc;
    }
    .stButton>button {
        width: 100%;
        font-weight: bold;
    }
    </style>
    """, unsafe_allow_html=True)

wizard.init_session(st.session_state)

STEP_COPY = {
    1: ("💬 What is your product?",
        "Tell us about what you're selling or the service you provide",
        "e.g., SaaS project management tool for small teams, handmade jewelry for eco-conscious consumers..."),
    2: ("💵 What's your monthly marketing budget?",
        "This helps us recommend the right mix of channels and strategies",
        "e.g., 5000"),
    3: ("👥 Who are your ideal customers?",
        "Describe your target audience demographics and characteristics",
        "e.g., Small business owners, age 30-50, tech-savvy, looking for efficiency tools..."),
    4: ("📈 What's your growth goal?",
        "What do you want to achieve with your marketing efforts?",
        "e.g., Increase monthly recurring revenue by 50% in 6 months, acquire 1000 new customers..."),
}


def render_landing():
    st.title("🧠 Strategic AI Marketing Planner")
    st.markdown(
        "### Transform your business data into actionable marketing strategies.\n"
        "Get personalized campaigns, budget allocation, and growth insights powered by AI."
    )
    if st.button("🚀 Start Planning"):
        wizard.start_planning(st.session_state)
        st.rerun()

    st.markdown("---")
    st.subheader("How It Works")
    cols = st.columns(4)
    steps = [
        ("✨ Answer Questions", "Tell us about your product, budget, customers, and growth goals."),
        ("📂 Upload Data", "Upload a CSV with product/customer data for deeper insights."),
        ("🧠 AI Processing", "The AI analyzes your data and drafts a strategy tailored to your business."),
        ("📊 Get Results", "Campaigns, budget allocation, timelines, and expected results."),
    ]
    for col, (title, text) in zip(cols, steps):
        with col:
            st.markdown(f"**{title}**")
            st.caption(text)


def render_upload_step():
    st.subheader("📂 Upload Your Data (Optional)")
    st.caption("Upload a CSV file with your product or customer data for deeper insights")
    uploaded_file = st.file_uploader(
        "Upload CSV",
        type=["csv"],
        key=wizard.uploader_key(st.session_state),
        label_visibility="collapsed",
    )

    if uploaded_file is not None and wizard.is_new_upload(st.session_state, uploaded_file.file_id):
        try:
            rows = read_csv_upload(uploaded_file.getvalue(), uploaded_file.name, uploaded_file.type)
        except InvalidFileTypeError as e:
            st.error(f"Invalid file type: {e}")
        else:
            wizard.store_upload(st.session_state, rows, uploaded_file.name, uploaded_file.file_id)
            st.success(f"File uploaded successfully! Parsed {len(rows)} rows of data.")

    rows = st.session_state.get("csv_rows")
    if rows:
        st.markdown(f"**{st.session_state.get('csv_filename')}**: {len(rows)} rows")
        st.dataframe(pd.DataFrame(rows).head(), width="stretch")
        if st.button("Remove file"):
            wizard.clear_upload(st.session_state)
            st.rerun()


def run_generation(answers):
    initial_state = {
        "answers": dict(answers),
        "csv_rows": st.session_state.get("csv_rows") or [],
    }
    final_state = dict(initial_state)
    with st.status("🚀 AI is building your strategy...", expanded=True) as status:
        st.write("🔎 Summarizing your data...")
        for event in app_graph.stream(initial_state):
            if event is None:
                continue
            for key, value in event.items():
                if value is not None:
                    final_state.update(value)
            if "insights" in event:
                st.write("✅ Data summarized.")
                st.write("🧠 **Strategist:** Drafting campaigns and budget allocation...")
            elif "strategist" in event:
                result = final_state.get("strategy_result", {})
                if result.get("source") == "generated":
                    st.write("✅ Strategy generated.")
                else:
                    st.write("⚠️ AI service unavailable, using budget templates.")
            elif "report" in event:
                st.write("📄 Plan assembled.")
        status.update(label="✅ Strategy ready!", state="complete", expanded=False)
    return final_state


def render_review_step(answers):
    st.subheader("✅ Review & Generate")
    st.markdown(
        f"- **Product/Service:** {answers['product']}\n"
        f"- **Monthly Budget:** {answers['budget']}\n"
        f"- **Target Customers:** {answers['customers']}\n"
        f"- **Growth Goal:** {answers['growthGoal']}"
    )
    rows = st.session_state.get("csv_rows") or []
    insight = analyze_csv_data(rows)
    if insight["totalRows"]:
        with st.expander(f"📊 Data insights ({insight['totalRows']} records)", expanded=False):
            for line in insight["insights"]:
                st.write(f"- {line}")
    else:
        st.info("No CSV uploaded - recommendations will use industry benchmarks.")

    ready = wizard.is_step_complete(wizard.REVIEW_STEP, answers)
    if st.button("🧠 Generate Strategy", disabled=not ready):
        try:
            final_state = run_generation(answers)
        except Exception as e:
            st.error(f"Strategy generation failed: {e}")
            st.exception(e)
            return
        wizard.complete_planning(st.session_state, final_state)
        st.rerun()


def render_onboarding():
    step = st.session_state["step"]
    answers = st.session_state["answers"]
    has_csv = bool(st.session_state.get("csv_rows"))

    st.progress(wizard.progress(step), text=f"Step {step} of {wizard.TOTAL_STEPS}")

    if step in STEP_COPY:
        title, caption, placeholder = STEP_COPY[step]
        key = wizard.ANSWER_STEPS[step]
        st.subheader(title)
        st.caption(caption)
        if key == "budget":
            answers[key] = st.text_input("Monthly Budget (USD)", value=answers[key], placeholder=placeholder)
        else:
            answers[key] = st.text_area(title, value=answers[key], placeholder=placeholder,
                                        height=120, label_visibility="collapsed")
    elif step == wizard.UPLOAD_STEP:
        render_upload_step()
        has_csv = bool(st.session_state.get("csv_rows"))
    else:
        render_review_step(answers)

    st.markdown("---")
    col_back, _, col_next = st.columns([1, 2, 1])
    with col_back:
        if st.button("⬅️ Back", disabled=not wizard.can_go_back(step)):
            st.session_state["step"] = wizard.previous_step(step)
            st.rerun()
    with col_next:
        if step < wizard.TOTAL_STEPS:
            label = "Skip ➡️" if step == wizard.UPLOAD_STEP and not has_csv else "Next ➡️"
            if st.button(label, disabled=not wizard.can_advance(step, answers, has_csv)):
                st.session_state["step"] = wizard.next_step(step)
                st.rerun()


def render_results():
    final_state = st.session_state["strategy_result"]
    result = final_state["strategy_result"]
    strategy = result["strategy"]
    summary = summarize_strategy(strategy)
    audit = final_state.get("budget_audit") or {}

    col_title, col_reset = st.columns([4, 1])
    with col_title:
        st.title("📊 Your Marketing Strategy")
        st.caption("AI-powered recommendations tailored to your business")
    with col_reset:
        if st.button("⬅️ Start Over"):
            wizard.start_over(st.session_state)
            st.rerun()

    if result["source"] != "generated":
        st.warning(
            f"The AI service was unavailable ({result.get('reason')}), "
            "so this plan comes from our budget-tier templates."
        )

    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Total Budget", format_currency(summary["total_budget"]), help="Monthly allocation")
    m2.metric("Expected Reach", f"{summary['total_reach']:,}", help="People per month")
    m3.metric("Campaigns", summary["campaign_count"])
    m4.metric("Timeline", f"{summary['timeline_weeks']} wks", help="Weeks to full scale")

    for warning in audit.get("warnings", []):
        st.info(f"Budget check: {warning}")

    tab_overview, tab_campaigns, tab_segments, tab_plan, tab_export = st.tabs([
        "💰 Budget & Reach",
        "📣 Campaigns",
        "👥 Segments",
        "🗓️ Roadmap & Options",
        "📄 Export Plan",
    ])

    with tab_overview:
        col_alloc, col_reach = st.columns(2)
        with col_alloc:
            st.subheader("Budget Allocation")
            if strategy["budgetAllocation"]:
                alloc_df = pd.DataFrame(strategy["budgetAllocation"])
                st.bar_chart(alloc_df.set_index("category")["amount"])
                st.dataframe(alloc_df, width="stretch", hide_index=True)
            else:
                st.write("No allocation provided.")
        with col_reach:
            st.subheader("Expected Reach by Campaign")
            if strategy["campaigns"]:
                reach_df = pd.DataFrame(strategy["campaigns"])[["name", "expectedReach"]]
                st.bar_chart(reach_df.set_index("name"))

    with tab_campaigns:
        for index, campaign in enumerate(strategy["campaigns"]):
            with st.expander(f"{campaign['name']} · {campaign['channel']}", expanded=True):
                c1, c2, c3, c4 = st.columns(4)
                c1.metric("Budget", format_currency(campaign["budget"]))
                c2.metric("Timeline", campaign["timeline"] or "n/a")
                c3.metric("Expected Reach", f"{campaign['expectedReach']:,}")
                cpr = summary["cost_per_reach"][index]
                c4.metric("Cost per Reach", f"${cpr:.2f}" if cpr is not None else "n/a")
                if campaign.get("description"):
                    st.write(campaign["description"])
                if campaign.get("costBreakdown"):
                    st.caption(f"Cost breakdown: {campaign['costBreakdown']}")

    with tab_segments:
        cols = st.columns(2)
        for i, segment in enumerate(strategy["targetSegments"]):
            with cols[i % 2]:
                st.markdown(f"#### {segment['name']}")
                st.caption(f"{segment['size']:,} people")
                for trait in segment["characteristics"]:
                    st.write(f"- {trait}")
                if segment.get("reasoning"):
                    st.info(segment["reasoning"])

    with tab_plan:
        st.subheader("Actionable Tips")
        for tip in strategy["actionableTips"]:
            st.write(f"- {tip}")
        st.subheader("Strategic Options")
        for option in strategy["strategyOptions"]:
            with st.expander(option["name"], expanded=True):
                st.write(option["description"])
                col_pros, col_cons = st.columns(2)
                with col_pros:
                    st.markdown("**Pros**")
                    for pro in option["pros"]:
                        st.write(f"✅ {pro}")
                with col_cons:
                    st.markdown("**Cons**")
                    for con in option["cons"]:
                        st.write(f"⚠️ {con}")

    with tab_export:
        st.markdown(final_state.get("final_report", ""))
        timestamp = datetime.now().strftime('%Y%m%d_%H%M')
        export_payload = {
            "source": result["source"],
            "reason": result.get("reason"),
            "model": result.get("model"),
            "answers": final_state.get("answers", {}),
            "strategy": strategy,
            "budget_audit": audit,
        }
        st.download_button(
            label="⬇️ Download Plan (JSON)",
            data=json.dumps(export_payload, indent=2, ensure_ascii=False),
            file_name=f"Marketing_Plan_{timestamp}.json",
            mime="application/json"
        )

        if "pdf_binary" not in st.session_state:
            with tempfile.TemporaryDirectory() as plots_dir:
                plots = render_strategy_plots(strategy, plots_dir)
                st.session_state["pdf_binary"] = render_report_pdf(final_state.get("final_report", ""), plots)
        if st.session_state.get("pdf_binary"):
            st.download_button(
                label="📄 Download Plan (PDF)",
                data=st.session_state["pdf_binary"],
                file_name=f"Marketing_Plan_{timestamp}.pdf",
                mime="application/pdf"
            )
        else:
            st.warning("PDF export is unavailable for this plan.")


phase = st.session_state["phase"]
if phase == wizard.PHASE_RESULTS and st.session_state.get("strategy_result"):
    render_results()
elif phase == wizard.PHASE_ONBOARDING:
    render_onboarding()
else:
    render_landing()
