"""Badge tiers for compatibility scores."""

from core.models import Badge

EXCEPTIONAL = Badge(label="Exceptional Match", tier="exceptional", color="#00b894", icon="🔥")
STRONG = Badge(label="Strong Match", tier="strong", color="#667eea", icon="✨")
GOOD = Badge(label="Good Match", tier="good", color="#74b9ff", icon="👍")
LOW = Badge(label="Low Match", tier="low", color="#636e72", icon="⚠️")

# (minimum score, badge), highest first
BADGE_TIERS = (
    (90, EXCEPTIONAL),
    (80, STRONG),
    (65, GOOD),
)


def badge_for_score(score: int) -> Badge:
    for threshold, badge in BADGE_TIERS:
        if score >= threshold:
            return badge
    return LOW
