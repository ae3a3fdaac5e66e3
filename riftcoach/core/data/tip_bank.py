"""Fixed coaching tip banks, per mistake category and per role.

Bank entries are templates: ``priority`` is the bank order, the generator
reassigns final priorities and attaches related mistake ids.
"""

from types import MappingProxyType

from riftcoach.contracts.analysis import CoachingTip, MistakeCategory
from riftcoach.contracts.common import Role

CATEGORY_LABELS = MappingProxyType(
    {
        MistakeCategory.CS_MISSING: "Farming",
        MistakeCategory.VISION: "Vision",
        MistakeCategory.POSITIONING: "Positioning",
        MistakeCategory.MAP_AWARENESS: "Map Awareness",
        MistakeCategory.OBJECTIVE: "Objectives",
        MistakeCategory.TRADING: "Trading",
        MistakeCategory.TIMING: "Timing",
        MistakeCategory.WAVE_MANAGEMENT: "Wave Management",
        MistakeCategory.ITEMIZATION: "Itemization",
        MistakeCategory.COOLDOWN_TRACKING: "Cooldowns",
        MistakeCategory.ROAMING: "Roaming",
        MistakeCategory.TEAMFIGHT: "Teamfighting",
    }
)


def _tip(tip_id: str, category: str, title: str, description: str, priority: int,
         role: Role | None = None) -> CoachingTip:
    return CoachingTip(
        tip_id=tip_id,
        category=category,
        title=title,
        description=description,
        priority=priority,
        role=role,
    )


CATEGORY_TIPS = MappingProxyType(
    {
        MistakeCategory.CS_MISSING: (
            _tip(
                "cs-1",
                CATEGORY_LABELS[MistakeCategory.CS_MISSING],
                "Practice last hitting",
                "Spend time in Practice Tool last hitting without abilities. Aim for 80+ CS at 10 minutes.",
                1,
            ),
            _tip(
                "cs-2",
                CATEGORY_LABELS[MistakeCategory.CS_MISSING],
                "Farm under tower",
                "Learn the pattern: two tower shots plus one auto for melee minions, one tower shot plus one auto for casters.",
                2,
            ),
        ),
        MistakeCategory.VISION: (
            _tip(
                "vision-1",
                CATEGORY_LABELS[MistakeCategory.VISION],
                "Buy Control Wards",
                "Buy a Control Ward every time you back. Place it in your jungle or next to an objective.",
                1,
            ),
            _tip(
                "vision-2",
                CATEGORY_LABELS[MistakeCategory.VISION],
                "Ward before objectives",
                "Ward the Dragon and Baron area one minute before they spawn so your team has information.",
                2,
            ),
        ),
        MistakeCategory.POSITIONING: (
            _tip(
                "pos-1",
                CATEGORY_LABELS[MistakeCategory.POSITIONING],
                "Stay with your team",
                "In mid and late game, do not split from your team unless you have vision and know where the enemies are.",
                1,
            ),
            _tip(
                "pos-2",
                CATEGORY_LABELS[MistakeCategory.POSITIONING],
                "Respect the fog of war",
                "If you cannot see three or more enemies on the map, play as if they are coming for you.",
                2,
            ),
        ),
        MistakeCategory.MAP_AWARENESS: (
            _tip(
                "map-1",
                CATEGORY_LABELS[MistakeCategory.MAP_AWARENESS],
                "Check your minimap",
                "Force yourself to glance at the minimap every three seconds until it becomes a habit.",
                1,
            ),
            _tip(
                "map-2",
                CATEGORY_LABELS[MistakeCategory.MAP_AWARENESS],
                "Track the enemy jungler",
                "Keep note of where the enemy jungler was last seen. If they showed bot, they can be top 30 to 40 seconds later.",
                2,
            ),
        ),
        MistakeCategory.OBJECTIVE: (
            _tip(
                "obj-1",
                CATEGORY_LABELS[MistakeCategory.OBJECTIVE],
                "Turn leads into objectives",
                "After a kill or a lead, always ask which objective you can take next.",
                1,
            ),
            _tip(
                "obj-2",
                CATEGORY_LABELS[MistakeCategory.OBJECTIVE],
                "Track objective timers",
                "Dragon respawns five minutes after it dies and Baron six. Be in position one minute early.",
                2,
            ),
        ),
        MistakeCategory.TRADING: (
            _tip(
                "trade-1",
                CATEGORY_LABELS[MistakeCategory.TRADING],
                "Trade when they last hit",
                "Hit your opponent when they walk up for a last hit. They must choose between trading back and taking the CS.",
                1,
            ),
            _tip(
                "trade-2",
                CATEGORY_LABELS[MistakeCategory.TRADING],
                "Respect power spikes",
                "Watch for levels 2, 3 and 6 and for completed items. Your opponent gets much stronger at those moments.",
                2,
            ),
        ),
    }
)

ROLE_TIPS = MappingProxyType(
    {
        Role.TOP: (
            _tip("top-1", "Top Lane", "Freeze near your tower",
                 "Freezing near your tower protects you from ganks and forces the enemy to overextend to farm.",
                 1, Role.TOP),
            _tip("top-2", "Top Lane", "Teleport for objectives",
                 "Keep Teleport to join bot side fights or contest Dragon instead of using it to return to lane.",
                 1, Role.TOP),
            _tip("top-3", "Top Lane", "Rift Herald timing",
                 "Between 8 and 14 minutes the Herald is your objective. Ping your jungler and set up vision.",
                 2, Role.TOP),
            _tip("top-4", "Top Lane", "Split push with vision",
                 "Only split push with vision. Place two wards in the enemy jungle before pushing deep.",
                 2, Role.TOP),
        ),
        Role.JUNGLE: (
            _tip("jg-1", "Jungle", "Objectives over ganks",
                 "Prioritize Dragon, Herald and Baron over ganks. An objective is a guaranteed advantage.",
                 1, Role.JUNGLE),
            _tip("jg-2", "Jungle", "Track the enemy jungler",
                 "Note where the enemy jungler shows. If they gank top, take their bot side camps or gank bot.",
                 1, Role.JUNGLE),
            _tip("jg-3", "Jungle", "Gank pushed lanes only",
                 "Never gank a lane that is pushed under the enemy tower. Wait for the wave or go elsewhere.",
                 2, Role.JUNGLE),
            _tip("jg-4", "Jungle", "Vision before objectives",
                 "One minute before Dragon or Baron, ward and sweep the area. That job is yours.",
                 2, Role.JUNGLE),
        ),
        Role.MID: (
            _tip("mid-1", "Mid Lane", "Push before you roam",
                 "Shove your wave before roaming, otherwise you lose CS and the roam fails with your wave under tower.",
                 1, Role.MID),
            _tip("mid-2", "Mid Lane", "Use lane priority",
                 "With mid priority your jungler can invade and contest scuttle crabs. Move to help them.",
                 1, Role.MID),
            _tip("mid-3", "Mid Lane", "Ping enemy roams",
                 "When your opponent disappears, ping immediately. A ping can save a teammate even if you are unsure.",
                 2, Role.MID),
            _tip("mid-4", "Mid Lane", "Contest every objective",
                 "Your central position gets you to Dragon and Herald first. Be present for every contest.",
                 2, Role.MID),
        ),
        Role.ADC: (
            _tip("adc-1", "ADC", "Survival is damage",
                 "A dead ADC deals no damage. Stay behind your frontline and never facecheck.",
                 1, Role.ADC),
            _tip("adc-2", "ADC", "Kite in teamfights",
                 "Use attack-move to kite. Hit the closest safe target.",
                 1, Role.ADC),
            _tip("adc-3", "ADC", "Farm side lanes safely",
                 "Do not farm a side lane without vision. If three enemies are missing, assume they are coming.",
                 2, Role.ADC),
            _tip("adc-4", "ADC", "Be at every Dragon",
                 "Your damage secures Dragon quickly. Show up even if it costs a few CS.",
                 2, Role.ADC),
        ),
        Role.SUPPORT: (
            _tip("sup-1", "Support", "Vision wins games",
                 "Buy Control Wards every back and place them near objectives or in jungle bushes.",
                 1, Role.SUPPORT),
            _tip("sup-2", "Support", "Peel for your carry",
                 "In teamfights your first job is keeping your ADC alive. Spend crowd control on the divers.",
                 1, Role.SUPPORT),
            _tip("sup-3", "Support", "Roam mid with purpose",
                 "Roam mid after shoving the bot wave. Warn your ADC and ward the river before leaving.",
                 2, Role.SUPPORT),
            _tip("sup-4", "Support", "Sweep before objectives",
                 "Sweep around Dragon and Baron one minute before spawn. Denying vision is decisive.",
                 2, Role.SUPPORT),
        ),
        Role.UNKNOWN: (),
    }
)
