"""
Streamlit UI for the Interior Quote Builder.

Features:
- Client details and rate card editor in the sidebar
- Rooms from templates, editable line item grid per room
- Live room, sub, tax and grand totals
- CSV / text export and snapshot saving
"""
import streamlit as st
import pandas as pd
import sys
from pathlib import Path
from datetime import datetime

# Add src to path for imports
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from interior_quote.config.settings import get_settings, configure_logging
from interior_quote.engine import PricingEngine, RateConfiguration
from interior_quote.engine.rates import load_rates, save_rates
from interior_quote.errors import InvalidEntryError, RateConfigurationError
from interior_quote.services.project_service import ProjectService
from interior_quote.services.templates import ROOM_TEMPLATES, ITEM_TEMPLATES, room_icon
from interior_quote.services.snapshot_service import SnapshotStore
from interior_quote.services.quote_document import (
    format_currency, quote_dataframe, quote_summary, render_text, to_csv,
)


st.set_page_config(
    page_title="Interior Quote Builder",
    layout="wide",
    initial_sidebar_state="expanded"
)


@st.cache_resource
def get_settings_cached():
    """Get cached settings."""
    settings = get_settings()
    configure_logging(settings.log_level)
    return settings


settings = get_settings_cached()
symbol = settings.currency_symbol

if 'service' not in st.session_state:
    st.session_state.service = ProjectService(rates=load_rates(settings.rate_card))
    st.session_state.engine = PricingEngine()
    st.session_state.save_status = None

service: ProjectService = st.session_state.service
engine: PricingEngine = st.session_state.engine
project = service.project


def _table_editor(label: str, table: dict, key: str) -> dict:
    st.caption(label)
    edited = st.data_editor(
        pd.DataFrame([{'Name': k, 'Rate': v} for k, v in table.items()], columns=['Name', 'Rate']),
        num_rows="dynamic",
        hide_index=True,
        use_container_width=True,
        key=key,
    )
    return {
        str(row['Name']).strip(): float(row['Rate']) if pd.notna(row['Rate']) else None
        for _, row in edited.iterrows()
        if pd.notna(row['Name']) and str(row['Name']).strip()
    }


# ============================================================================
# SIDEBAR: Client and Rate Card
# ============================================================================
with st.sidebar:
    st.header("👤 Client")
    with st.container(border=True):
        client = project.client
        name = st.text_input("Client Name", value=client.name)
        contact = st.text_input("Contact", value=client.contact)
        address = st.text_area("Address", value=client.address, height=70)
        property_type = st.selectbox(
            "Property Type", ["", "1 BHK", "2 BHK", "3 BHK", "4 BHK", "Villa", "Office"],
            index=0,
        )
        carpet_area = st.number_input("Carpet Area (sq ft)", min_value=0.0, value=float(client.carpet_area))
        service.update_client(
            name=name, contact=contact, address=address,
            property_type=property_type or client.property_type, carpet_area=carpet_area,
        )

    st.divider()

    with st.expander("⚙️ Rate Card"):
        rates = project.rates
        materials = _table_editor("Materials", dict(rates.materials), "materials_editor")
        finishes = _table_editor("Finishes", dict(rates.finishes), "finishes_editor")
        hardware = _table_editor("Hardware", dict(rates.hardware_multipliers), "hardware_editor")
        labor = st.number_input("Labor (per sq ft)", min_value=0.0, value=float(rates.labor_rate_sqft))
        tax = st.number_input("GST %", min_value=0.0, max_value=100.0, value=float(rates.tax_rate))
        fee = st.number_input("Design Fee", min_value=0.0, value=float(rates.design_fee_fixed))

        if st.button("💾 Apply Rates", use_container_width=True):
            try:
                new_rates = RateConfiguration.from_dict({
                    'materials': materials,
                    'finishes': finishes,
                    'hardware_multipliers': hardware,
                    'labor_rate_sqft': labor,
                    'tax_rate': tax,
                    'design_fee_fixed': fee,
                })
                service.set_rates(new_rates)
                save_rates(new_rates, settings.rate_card)
                st.rerun()
            except RateConfigurationError as e:
                for err in e.errors:
                    st.error(err)


# ============================================================================
# MAIN CONTENT
# ============================================================================
st.title("Interior Quote Builder")
st.caption(f"v1.0 | {datetime.now().strftime('%Y-%m-%d')}")

totals = engine.totals(project)

col1, col2 = st.columns([1.8, 1.2], gap="large")

with col1:
    st.subheader("Rooms")

    with st.container(border=True):
        c1, c2, c3 = st.columns([2, 2, 1])
        with c1:
            template_key = st.selectbox(
                "Room Template",
                options=list(ROOM_TEMPLATES.keys()),
                format_func=lambda k: f"{ROOM_TEMPLATES[k].icon} {ROOM_TEMPLATES[k].name}",
            )
        with c2:
            room_name = st.text_input("Room Name", placeholder=ROOM_TEMPLATES[template_key].name)
        with c3:
            st.write("")
            st.write("")
            if st.button("➕ Add Room", type="primary"):
                service.add_room(name=room_name, template=template_key)
                st.rerun()

    for room in list(project.rooms):
        header = f"{room_icon(room.room_type)} {room.name} · {format_currency(totals.room_total(room.id), symbol)}"
        with st.expander(header, expanded=True):
            edited = st.data_editor(
                pd.DataFrame([item.to_dict() for item in room.items],
                             columns=['id', 'name', 'width', 'height', 'depth',
                                      'material', 'finish', 'hardware', 'qty']),
                hide_index=True,
                use_container_width=True,
                column_config={
                    "id": None,
                    "name": st.column_config.TextColumn("Item"),
                    "width": st.column_config.NumberColumn("W (ft)", min_value=0.0),
                    "height": st.column_config.NumberColumn("H (ft)", min_value=0.0),
                    "depth": st.column_config.NumberColumn("D (ft)", min_value=0.0),
                    "material": st.column_config.SelectboxColumn("Material", options=list(project.rates.materials)),
                    "finish": st.column_config.SelectboxColumn("Finish", options=list(project.rates.finishes)),
                    "hardware": st.column_config.SelectboxColumn(
                        "Hardware", options=list(project.rates.hardware_multipliers)),
                    "qty": st.column_config.NumberColumn("Qty", min_value=1, step=1),
                },
                key=f"items_{room.id}",
            )

            b1, b2, b3, b4 = st.columns(4)
            with b1:
                if st.button("💾 Update", key=f"update_{room.id}"):
                    try:
                        for _, row in edited.iterrows():
                            changes = {k: row[k] for k in ('name', 'width', 'height', 'depth',
                                                          'material', 'finish', 'hardware', 'qty')}
                            service.update_item(room.id, row['id'], **changes)
                        st.rerun()
                    except InvalidEntryError as e:
                        st.error(str(e))
            with b2:
                item_key = st.selectbox(
                    "Item", options=list(ITEM_TEMPLATES.keys()),
                    format_func=lambda k: ITEM_TEMPLATES[k].name,
                    key=f"tpl_{room.id}", label_visibility="collapsed",
                )
            with b3:
                if st.button("➕ Item", key=f"add_{room.id}"):
                    service.add_item_from_template(room.id, item_key)
                    st.rerun()
            with b4:
                if st.button("🗑️ Room", key=f"remove_{room.id}"):
                    service.remove_room(room.id)
                    st.rerun()

with col2:
    st.subheader("Quote Summary")

    with st.container(border=True):
        m1, m2 = st.columns(2)
        m1.metric("Grand Total", format_currency(totals.grand_total, symbol))
        m2.metric("Items", sum(len(r.items) for r in project.rooms))

        st.divider()
        for label, value in quote_summary(totals, project.rates, symbol):
            st.markdown(f"**{label}:** {value}")

        st.divider()

        btn_col1, btn_col2 = st.columns(2)
        with btn_col1:
            st.download_button(
                "📥 CSV",
                data=to_csv(project, totals),
                file_name=f"quote_{project.client.name or 'client'}.csv",
                mime="text/csv",
                use_container_width=True,
            )
        with btn_col2:
            st.download_button(
                "🖨️ Text",
                data=render_text(project, totals, symbol),
                file_name=f"quote_{project.client.name or 'client'}.txt",
                mime="text/plain",
                use_container_width=True,
            )

    with st.container(border=True):
        st.markdown("##### ☁️ Save Snapshot")
        user_id = st.text_input("User ID", key="user_id")
        if st.button("Save", use_container_width=True):
            result = SnapshotStore(settings.snapshot_dir).save(user_id, project, totals)
            st.session_state.save_status = result
        result = st.session_state.save_status
        if result is not None:
            if result.ok:
                st.success(f"Saved snapshot {result.snapshot_id}")
            else:
                st.error(f"Save failed: {result.error}. Your quote is unchanged; try again.")

    if project.rooms:
        with st.expander("📊 Detailed Line Breakdown"):
            st.dataframe(quote_dataframe(project, totals), use_container_width=True, hide_index=True)
