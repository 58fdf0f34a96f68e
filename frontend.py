import streamlit as st
from datetime import date

from orderboard.analysis import MetricsCalculator, OrderAnalyzer
from orderboard.config import ORDERS_FILE, STATUS_ALL
from orderboard.exceptions import ConfigurationError, OrderFetchError, OrderLoadError
from orderboard.io import DataLoader, OrderFetcher
from orderboard.presentation import (
    STATUS_COLORS, WEEKDAY_LABELS, address_text, build_calendar_days, day_order_count,
    default_selected_day, format_clp, initial_month, logistics_label, month_title,
    notes_text, observation_text, order_card_rows, orders_to_frame, selected_orders,
    shift_month, status_label,
)
from orderboard.query import Fulfillment, OrderFilters, SortState, available_statuses, select_and_sort
from orderboard.utils import to_iso_day

# ---- CONFIG ----
st.set_page_config(
    page_title="Pedidos",
    page_icon="💐",
    layout="wide",
    initial_sidebar_state="expanded"
)

SORT_LABELS = {
    "id": "Pedido",
    "customer": "Cliente",
    "reservation": "Reserva",
    "logistics": "Logística",
    "message": "Mensaje",
    "status": "Estado",
    "total": "Total",
}

FULFILLMENT_LABELS = {
    Fulfillment.ALL: "Todos",
    Fulfillment.DELIVERY: "Envío",
    Fulfillment.PICKUP: "Retiro",
}

# ---- CUSTOM CSS ----
st.markdown("""
<style>
    .main-header {
        font-size: 2.2rem;
        font-weight: bold;
        color: #be185d;
        margin-bottom: 0.25rem;
    }
    .sub-header {
        font-size: 1.1rem;
        color: #666;
        margin-bottom: 1.5rem;
    }
</style>
""", unsafe_allow_html=True)

# ---- HELPER FUNCTIONS ----
def load_orders():
    """Fetch orders into the session, keeping the error message on failure"""
    try:
        if ORDERS_FILE:
            orders = DataLoader.load_orders(ORDERS_FILE)
        else:
            orders = OrderFetcher().fetch_orders()
        st.session_state.orders = orders
        st.session_state.error = ""
    except (OrderFetchError, OrderLoadError, ConfigurationError) as e:
        st.session_state.orders = []
        st.session_state.error = str(e)
    st.session_state.loaded = True


def status_badge(status):
    color = STATUS_COLORS.get(status, "gray")
    return f":{color}[**{status_label(status)}**]"


def render_order_details(order):
    """Recipient, address and message lines shared by cards and calendar"""
    st.markdown(f"**{logistics_label(order.is_pickup)}** · Recibe: {order.recipient_name} · "
                f"Teléfono: {order.recipient_phone}")
    if not order.is_pickup:
        st.caption(f"Dirección: {address_text(order)}")
    st.caption(f"Mensaje: {notes_text(order)}")
    st.caption(f"Obs: {observation_text(order)}")


def render_cards(orders):
    if not orders:
        st.info("No hay pedidos para estos filtros.")
        return

    columns = st.columns(3)
    for idx, order in enumerate(orders):
        with columns[idx % 3]:
            with st.container(border=True):
                st.caption(f"Pedido #{order.id}")
                st.markdown(f"### {order.recipient_name}")
                st.markdown(f"{order.customer_name} · {status_badge(order.status)}")
                for label, value in order_card_rows(order):
                    st.markdown(f"**{label}:** {value}")
                if order.items:
                    st.caption(", ".join(order.items))
                st.caption(f"Mensaje: {notes_text(order)}")
                st.caption(f"Observaciones: {observation_text(order)}")


def render_table(orders):
    if not orders:
        st.info("No hay pedidos para estos filtros.")
        return

    sort_state = st.session_state.sort_state
    columns = st.columns(len(SORT_LABELS))
    for column, (key, label) in zip(columns, SORT_LABELS.items()):
        arrow = ""
        if key == sort_state.key:
            arrow = " ▲" if sort_state.direction == "asc" else " ▼"
        if column.button(f"{label}{arrow}", key=f"sort_{key}", use_container_width=True):
            st.session_state.sort_state = sort_state.select(key)
            st.rerun()

    df = orders_to_frame(sort_state.apply(orders))
    st.dataframe(df, hide_index=True, use_container_width=True)


def render_calendar(orders):
    grouped = OrderAnalyzer.group_by_day(orders)
    today = date.today()

    if "month_cursor" not in st.session_state:
        st.session_state.month_cursor = initial_month(orders, today)
    if "selected_day" not in st.session_state:
        st.session_state.selected_day = default_selected_day(grouped, today)

    month = st.session_state.month_cursor
    nav_prev, nav_title, nav_next = st.columns([1, 3, 1])
    with nav_prev:
        if st.button("Anterior", use_container_width=True):
            st.session_state.month_cursor = shift_month(month, -1)
            st.rerun()
    with nav_title:
        st.markdown(f"<h3 style='text-align: center; text-transform: capitalize'>"
                    f"{month_title(month)}</h3>", unsafe_allow_html=True)
    with nav_next:
        if st.button("Siguiente", use_container_width=True):
            st.session_state.month_cursor = shift_month(month, 1)
            st.rerun()

    header = st.columns(7)
    for column, label in zip(header, WEEKDAY_LABELS):
        column.markdown(f"**{label}**")

    days = build_calendar_days(month)
    for week_start in range(0, len(days), 7):
        week = st.columns(7)
        for column, day in zip(week, days[week_start:week_start + 7]):
            key = to_iso_day(day)
            count = day_order_count(grouped, day)
            label = f"{day.day} ({count})" if count else f"{day.day}"
            button_type = "primary" if key == st.session_state.selected_day else "secondary"
            if column.button(label, key=f"day_{key}", type=button_type,
                             disabled=day.month != month.month, use_container_width=True):
                st.session_state.selected_day = key
                st.rerun()

    st.markdown("---")
    day_key = st.session_state.selected_day
    st.subheader(f"Pedidos para {day_key}")
    day_orders = selected_orders(grouped, day_key)
    if not day_orders:
        st.info("No hay pedidos para esta fecha.")
        return
    for order in day_orders:
        with st.container(border=True):
            st.markdown(f"**#{order.id} {order.recipient_name}** · {status_badge(order.status)}")
            st.markdown(order.delivery_slot)
            render_order_details(order)


# ---- MAIN APP ----
st.markdown('<div class="main-header">💐 Pedidos</div>', unsafe_allow_html=True)
st.markdown('<div class="sub-header">Gestión de reservas por fecha de entrega o retiro</div>', unsafe_allow_html=True)

if "sort_state" not in st.session_state:
    st.session_state.sort_state = SortState()

if not st.session_state.get("loaded"):
    with st.spinner("Cargando pedidos..."):
        load_orders()

# ============ SIDEBAR ============
st.sidebar.title("🔍 Filtros")

if st.sidebar.button("Actualizar", type="primary", use_container_width=True):
    with st.spinner("Cargando pedidos..."):
        load_orders()

if st.session_state.error:
    st.error(st.session_state.error)
    st.stop()

orders = st.session_state.orders
statuses = available_statuses(orders)

selected_status = st.sidebar.selectbox(
    "Estado",
    [STATUS_ALL] + statuses,
    format_func=lambda s: "Todos" if s == STATUS_ALL else status_label(s),
)

selected_fulfillment = st.sidebar.selectbox(
    "Logística",
    list(FULFILLMENT_LABELS),
    format_func=lambda f: FULFILLMENT_LABELS[f],
)

search = st.sidebar.text_input(
    "Buscar",
    placeholder="N° pedido, cliente, destinatario, fecha...",
)

filters = OrderFilters(status=selected_status, fulfillment=selected_fulfillment, search=search)
filtered = select_and_sort(orders, filters)

# ---- METRICS OVERVIEW ----
metrics = MetricsCalculator.summarize(filtered)

col1, col2, col3, col4 = st.columns(4)

with col1:
    st.metric("Pedidos", metrics.order_count)
    st.caption(format_clp(metrics.total_amount))

with col2:
    st.metric("Envíos", metrics.delivery_count)
    st.caption(format_clp(metrics.delivery_amount))

with col3:
    st.metric("Retiros", metrics.pickup_count)
    st.caption(format_clp(metrics.pickup_amount))

with col4:
    st.metric("Ticket promedio", format_clp(metrics.average_ticket))
    st.caption("Sobre tabla filtrada")

if metrics.invalid_total_count:
    st.warning(f"⚠️ {metrics.invalid_total_count} pedido(s) con total ilegible no se suman a los montos")

st.markdown("---")

# ============ TABS ============
tab_table, tab_cards, tab_calendar = st.tabs(["📋 Tabla", "🗂️ Tarjetas", "📅 Calendario"])

with tab_table:
    render_table(filtered)

with tab_cards:
    render_cards(filtered)

with tab_calendar:
    render_calendar(filtered)
