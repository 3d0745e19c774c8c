"""
SVG rendering for the streak card.

The card has a fixed 560x240 layout. Colours are CSS custom properties with
a `prefers-color-scheme: dark` override, so one file serves both themes.

Rendering is deterministic: equal stats produce byte-identical output,
which keeps CI commits of the card free of spurious diffs.
"""

from collections.abc import Sequence
from string import Template

from streak_card.stats.streaks import WINDOW_DAYS, ActivityStats, WindowDay, bar_height

CARD_WIDTH = 560
CARD_HEIGHT = 240

# Bars live in a group translated to (32, 128); the chart baseline is drawn at
# y=188, i.e. 60 in group coordinates.
BAR_ORIGIN_X = 24
BAR_STEP = 6
BAR_WIDTH = 4
BAR_BASELINE = 60

CARD_TEMPLATE = Template(
    """<svg width="560" height="240" viewBox="0 0 560 240" xmlns="http://www.w3.org/2000/svg">
<style>
:root {
  --bg-start: #f7f4ef;
  --bg-end: #e0f2fe;
  --card: rgba(255,255,255,0.92);
  --text: #0f172a;
  --muted: #64748b;
  --border: rgba(15,23,42,0.08);
  --accent-1: #0ea5e9;
  --accent-2: #22c55e;
  --accent-3: #f59e0b;
}
@media (prefers-color-scheme: dark) {
  :root {
    --bg-start: #0b1220;
    --bg-end: #0f172a;
    --card: rgba(15,23,42,0.88);
    --text: #e2e8f0;
    --muted: #94a3b8;
    --border: rgba(148,163,184,0.18);
    --accent-1: #38bdf8;
    --accent-2: #4ade80;
    --accent-3: #fbbf24;
  }
}

text {
  font-family: "Space Grotesk", "Manrope", "Segoe UI", sans-serif;
  fill: var(--text);
}
.small { fill: var(--muted); font-size: 11px; letter-spacing: 0.02em; }
.label { fill: var(--muted); font-size: 10px; letter-spacing: 0.18em; }
.value { font-size: 24px; font-weight: 600; }
.title { font-size: 16px; font-weight: 600; letter-spacing: 0.06em; text-transform: uppercase; }
.chip { fill: var(--text); font-size: 10px; letter-spacing: 0.14em; }
.bar { fill: url(#barGrad); }
</style>

<defs>
  <linearGradient id="bg" x1="0" y1="0" x2="1" y2="1">
    <stop offset="0%" stop-color="var(--bg-start)"/>
    <stop offset="100%" stop-color="var(--bg-end)"/>
  </linearGradient>
  <linearGradient id="barGrad" x1="0" y1="0" x2="0" y2="1">
    <stop offset="0%" stop-color="var(--accent-1)"/>
    <stop offset="100%" stop-color="var(--accent-2)"/>
  </linearGradient>
  <linearGradient id="spark" x1="0" y1="0" x2="1" y2="1">
    <stop offset="0%" stop-color="var(--accent-1)" stop-opacity="0.9"/>
    <stop offset="100%" stop-color="var(--accent-3)" stop-opacity="0.9"/>
  </linearGradient>
  <pattern id="grid" width="22" height="22" patternUnits="userSpaceOnUse">
    <path d="M22 0H0V22" fill="none" stroke="rgba(15,23,42,0.06)" stroke-width="1"/>
  </pattern>
  <filter id="blur" x="-20%" y="-20%" width="140%" height="140%">
    <feGaussianBlur stdDeviation="18"/>
  </filter>
</defs>

<rect width="560" height="240" rx="28" fill="url(#bg)"/>
<circle cx="72" cy="40" r="54" fill="url(#spark)" opacity="0.5" filter="url(#blur)"/>
<circle cx="498" cy="196" r="64" fill="url(#spark)" opacity="0.35" filter="url(#blur)"/>

<rect x="12" y="12" width="536" height="216" rx="22" fill="var(--card)" stroke="var(--border)"/>
<rect x="12" y="12" width="536" height="216" rx="22" fill="url(#grid)" opacity="0.55"/>

<text x="32" y="38" class="title">GitHub Activity 🥷</text>
<rect x="426" y="22" width="106" height="20" rx="10" fill="url(#spark)" opacity="0.12"/>
<text x="440" y="36" class="chip">LAST ${window_days}D</text>

<text x="32" y="84" class="value">🔥 ${current_streak}</text>
<text x="32" y="102" class="label">CURRENT STREAK</text>

<text x="176" y="84" class="value">🏆 ${longest_streak}</text>
<text x="176" y="102" class="label">LONGEST</text>

<text x="304" y="84" class="value">📈 ${active_days}/${window_days}</text>
<text x="304" y="102" class="label">ACTIVE DAYS</text>

<rect x="32" y="126" width="496" height="62" rx="14" fill="rgba(15,23,42,0.04)"/>
<line x1="32" y1="188" x2="528" y2="188" stroke="rgba(15,23,42,0.08)" stroke-width="1"/>
<g transform="translate(32,128)">${bars}</g>

<text x="32" y="210" class="small">
Repos ${public_repos} · Stars ${total_stars} · Followers ${followers} · Following ${following} · Commits(${window_days}d) ${window_contributions} · Total ${total_contributions}
</text>
</svg>
"""
)


def render_bar(index: int, count: int) -> str:
    """Render the bar for the `index`-th window day (0 = oldest)."""
    height = bar_height(count)
    return (
        f'<rect class="bar" x="{BAR_ORIGIN_X + index * BAR_STEP}" y="{BAR_BASELINE - height}" '
        f'width="{BAR_WIDTH}" height="{height}" rx="1"/>'
    )


def render_bars(window: Sequence[WindowDay]) -> str:
    """Render one bar per window day, oldest on the left."""
    return "".join(render_bar(i, day.count) for i, day in enumerate(window))


def render_card(stats: ActivityStats) -> str:
    """
    Render the full SVG card.

    Args:
        stats: Computed activity statistics

    Returns:
        SVG document text, newline-terminated
    """
    if stats.window_days != WINDOW_DAYS or len(stats.window) != WINDOW_DAYS:
        raise ValueError(
            f"card layout holds exactly {WINDOW_DAYS} days, "
            f"got window_days={stats.window_days} with {len(stats.window)} entries"
        )

    return CARD_TEMPLATE.substitute(
        window_days=stats.window_days,
        current_streak=stats.current_streak,
        longest_streak=stats.longest_streak,
        active_days=stats.active_days,
        bars=render_bars(stats.window),
        public_repos=stats.public_repos,
        total_stars=stats.total_stars,
        followers=stats.followers,
        following=stats.following,
        window_contributions=stats.window_contributions,
        total_contributions=stats.total_contributions,
    )
