"""Leave-bucket cards: allowed, used and remaining hours plus the dates used."""

from __future__ import annotations

from typing import Any, ClassVar

from jinja2 import DictLoader, Environment, select_autoescape

from hours_tracker.components.base import Component
from hours_tracker.models.enums import PtoType
from hours_tracker.services import calendar
from hours_tracker.services.buckets import TimeBucketData

_TEMPLATES = {
    "bucket_card.html": """\
<div class="card" data-type="{{ entry_type }}">
  <h4>{{ title }}</h4>
  <div class="row"><span class="label">Allowed</span><span>{{ "%.2f"|format(data.allowed) }} hours</span></div>
  <div class="row"><span class="label{% if all_approved %} approved{% endif %}">Used</span><span>{{ "%.2f"|format(data.used) }} hours</span></div>
  <div class="row"><span class="label">Remaining</span><span{% if negative %} class="negative-balance"{% endif %}>{{ "%.2f"|format(data.remaining) }} hours</span></div>
{%- if entries %}
  <button class="toggle-button" aria-expanded="{{ 'true' if expanded else 'false' }}">{{ "Hide Details" if expanded else "Show Details" }}</button>
{%- endif %}
{%- if expanded and entries %}
  <div class="usage-section">
    <div class="usage-title">Dates Used</div>
    <ul class="usage-list">
    {%- for entry in entries %}
      <li><span class="usage-date{% if entry.approved %} approved{% endif %}" data-date="{{ entry.date.isoformat() }}">{{ entry.label }}</span> <span>{{ "%.1f"|format(entry.hours) }} hours</span></li>
    {%- endfor %}
    </ul>
  </div>
{%- endif %}
</div>
""",
}

_environment = Environment(
    loader=DictLoader(_TEMPLATES),
    autoescape=select_autoescape(default=True, default_for_string=True),
    trim_blocks=True,
    lstrip_blocks=True,
)


def _date_label(value: Any) -> str:
    day = calendar.to_calendar_date(value)
    return f"{calendar.get_day_name(day)[:3]}, {calendar.MONTH_NAMES[day.month - 1][:3]} {day.day}, {day.year}"


class BucketCard(Component):
    """Card for one leave bucket.

    Properties: ``data`` (TimeBucketData), ``entries`` (usage entries with
    ``date`` and ``hours``), ``approved_dates`` (dates an admin approved) and
    ``expanded`` (show the usage list).
    """

    title: ClassVar[str] = ""
    entry_type: ClassVar[PtoType]
    show_negative: ClassVar[bool] = True
    observed_properties = frozenset({"data", "entries", "approved_dates", "expanded"})
    defaults = {"data": None, "entries": (), "approved_dates": frozenset(), "expanded": False}

    def render(self) -> str:
        data: TimeBucketData = self._props["data"] or TimeBucketData(allowed=0, used=0)
        approved_dates = set(self._props["approved_dates"])
        entries = [
            {
                "date": entry.date,
                "hours": entry.hours,
                "label": _date_label(entry.date),
                "approved": entry.date in approved_dates,
            }
            for entry in self._props["entries"]
        ]
        template = _environment.get_template("bucket_card.html")
        return template.render(
            title=self.title,
            entry_type=self.entry_type.value,
            data=data,
            negative=self.show_negative and (data.remaining or 0) < 0,
            entries=entries,
            all_approved=bool(entries) and all(e["approved"] for e in entries),
            expanded=bool(self._props["expanded"]),
        )


class PtoCard(BucketCard):
    tag = "pto-pto-card"
    title = "PTO"
    entry_type = PtoType.PTO


class SickCard(BucketCard):
    tag = "pto-sick-card"
    title = "Sick Time"
    entry_type = PtoType.SICK


class BereavementCard(BucketCard):
    tag = "pto-bereavement-card"
    title = "Bereavement"
    entry_type = PtoType.BEREAVEMENT


class JuryDutyCard(BucketCard):
    tag = "pto-jury-duty-card"
    title = "Jury Duty"
    entry_type = PtoType.JURY_DUTY
    show_negative = False
