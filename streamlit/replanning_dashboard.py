"""
Replanning Dashboard - catering operations overview and flight replanning.

Uses an in-memory store held in the Streamlit session, seeded with demo data
or loaded from a flights CSV.

Features: headline metrics, flights table, reassignment processing with its
audit log, compatible flight candidates, confirming a reassignment, and
employee performance.

Run with: uv run streamlit run streamlit/replanning_dashboard.py
"""

import plotly.express as px
import streamlit as st

from galleyops.catering.metrics import compute_dashboard_metrics, employees_dataframe
from galleyops.exceptions import GalleyOpsError
from galleyops.log import configure_logging
from galleyops.replanning.models import flights_dataframe, reassignments_dataframe
from galleyops.replanning.service import ReplanningService
from galleyops.replanning.stats import summarize_reassignments
from galleyops.replanning.store import CsvFlightSource, InMemoryStore

STATUS_BADGES = {
    "success": "🟢 Success",
    "pending": "🟡 Pending",
    "no_flight": "🔴 No Flight",
}


def get_service() -> ReplanningService:
    """Session-scoped service over an in-memory store seeded with demo data."""
    if "service" not in st.session_state:
        store = InMemoryStore()
        store.load_demo_data()
        st.session_state["service"] = ReplanningService(store=store)
    return st.session_state["service"]


def render_metrics(store: InMemoryStore) -> None:
    metrics = compute_dashboard_metrics(
        store.list_flights(), store.list_bottle_analyses(), store.list_trolley_verifications()
    )
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total flights", f"{metrics.total_flights:,}")
    col2.metric("Avg reliability", f"{metrics.average_reliability:.1f}%")
    col3.metric("Food saved (meals)", f"{metrics.food_saved:,}")
    col4.metric("Trolley error rate", f"{metrics.trolley_error_rate:.1f}%")

    fig = px.pie(
        metrics.bottle_dataframe(),
        names="action",
        values="count",
        title="Bottle dispositions",
        color="action",
        color_discrete_map={"reuse": "#2ca02c", "combine": "#ff7f0e", "discard": "#d62728"},
    )
    st.plotly_chart(fig, width="stretch")


def render_employees(store: InMemoryStore) -> None:
    st.header("Employee performance")
    employees = store.list_employee_metrics()
    if not employees:
        st.caption("No employee metrics recorded.")
        return
    st.dataframe(
        employees_dataframe(employees),
        width="stretch",
        hide_index=True,
        column_config={
            "avg_prep_time": st.column_config.NumberColumn("Avg prep (min)", format="%.1f"),
            "error_rate": st.column_config.NumberColumn("Error rate", format="%.1f%%"),
            "compliance_rate": st.column_config.NumberColumn("Compliance", format="%.1f%%"),
        },
    )


def render_replanning(service: ReplanningService) -> None:
    st.header("Flight replanning")
    st.caption(
        f"Catering from delayed or cancelled flights moves to the soonest scheduled "
        f"flight of the same airline departing within {service.window.total_seconds() / 3600:g} hours."
    )

    flights = service.store.list_flights()
    disrupted = [f for f in flights if f.is_disrupted]

    if st.button("Process reassignments", type="primary"):
        try:
            result = service.process_reassignments()
        except GalleyOpsError as e:
            st.error(f"Failed to process reassignments: {e.message}")
        else:
            st.success(f"Processed {result.processed} affected flights")

    if not disrupted:
        st.info("No delayed or cancelled flights.")
    for flight in disrupted:
        candidates = service.compatible_flights(flight.id)
        with st.expander(
            f"{flight.flight_number} · {flight.airline} · {flight.status.value} "
            f"({flight.planned_meals} meals / {flight.planned_bottles} bottles)"
        ):
            if not candidates:
                st.warning("No compatible flight within the window.")
                continue
            options = {
                f"{c.flight_number} → {c.destination} at {c.departure_time:%H:%M}": c
                for c in candidates
            }
            choice = st.selectbox("Target flight", list(options), key=f"target-{flight.id}")
            if st.button("Reassign to order", key=f"confirm-{flight.id}"):
                try:
                    order = service.confirm_reassignment(flight.id, options[choice].id)
                except GalleyOpsError as e:
                    st.error(e.message)
                else:
                    st.success(
                        f"Pending order created for {order.flight_number}: "
                        f"{order.meals_requested} meals, {order.beverages_requested} bottles"
                    )
                    st.rerun()


def render_log(service: ReplanningService) -> None:
    st.header("Reassignment log")
    records = service.list_reassignments()
    if not records:
        st.caption("No reassignments processed yet.")
        return

    stats = summarize_reassignments(records)
    col1, col2, col3 = st.columns(3)
    col1.metric("Records", f"{stats.total:,}")
    col2.metric("Success rate", f"{stats.success_rate:.1f}%")
    col3.metric("Meals reassigned", f"{stats.meals_reassigned:,}")

    df = reassignments_dataframe(records)
    df["status"] = df["status"].map(STATUS_BADGES).fillna(df["status"])
    st.dataframe(
        df.drop(columns=["id"]),
        width="stretch",
        column_config={
            "timestamp": st.column_config.DatetimeColumn("Logged", format="YYYY-MM-DD HH:mm:ss"),
        },
    )


def main() -> None:
    st.set_page_config(
        page_title="Catering Replanning",
        page_icon="✈️",
        layout="wide",
    )
    configure_logging()
    st.title("✈️ Catering Operations Dashboard")

    service = get_service()
    store = service.store

    with st.sidebar:
        st.header("Data")
        csv_path = st.text_input("Flights CSV path", placeholder="data/flights.csv")
        if csv_path and st.button("Load flights"):
            try:
                flights = CsvFlightSource(csv_path).list_flights()
            except GalleyOpsError as e:
                st.error(e.message)
            else:
                st.session_state["service"] = ReplanningService(store=InMemoryStore(flights))
                st.rerun()
        if st.button("Reset demo data"):
            store.load_demo_data()
            st.rerun()

    render_metrics(store)

    st.header("Flights")
    st.dataframe(
        flights_dataframe(store.list_flights()).drop(columns=["id"]),
        width="stretch",
        column_config={
            "departure_time": st.column_config.DatetimeColumn("Departure", format="YYYY-MM-DD HH:mm"),
        },
    )

    flight_options = {f"{f.flight_number} → {f.destination}": f.id for f in store.list_flights()}
    if flight_options:
        col_sel, col_btn = st.columns([3, 1])
        selected = col_sel.selectbox("Flight", list(flight_options), key="reliability-flight")
        if col_btn.button("Check reliability"):
            result = service.check_reliability(flight_options[selected])
            source = "mock" if result.weather.mock else "live"
            st.info(
                f"Reliability {result.reliability}% ({result.weather.conditions}, {source} weather). "
                f"{result.recommendation}"
            )

    render_replanning(service)
    render_log(service)
    render_employees(store)


if __name__ == "__main__":
    main()
