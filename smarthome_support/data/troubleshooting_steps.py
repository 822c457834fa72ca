from smarthome_support.domain.models import ESCALATE, RESOLVE, FreeTextRule, Option, Step

ROOT_STEP_ID = 1

# ==============================================================================
# STEP DEFINITIONS
# ==============================================================================

# --- STEP 1: ROOT MENU ---
step_01 = Step(
    id=1,
    text="What issue are you experiencing with your SmartHome Hub?",
    options=(
        Option(text="Hub won't connect to Wi-Fi", outcome=2),
        Option(text="Hub is unresponsive", outcome=3),
        Option(text="Devices not connecting to Hub", outcome=4),
    ),
)

# --- WI-FI BRANCH ---
step_02 = Step(
    id=2,
    text="Let's troubleshoot the Wi-Fi connection. Is your router powered on and functioning?",
    options=(
        Option(text="Yes, the router is working", outcome=5),
        Option(text="No, there seems to be an issue with the router", outcome=6),
        Option(text="I'm not sure", outcome=7),
    ),
)

step_05 = Step(
    id=5,
    text=(
        "Great. Let's try reconnecting your hub to Wi-Fi. "
        "Have you tried forgetting the network and reconnecting?"
    ),
    options=(
        Option(text="Yes, I've tried that", outcome=12),
        Option(text="No, I'll try that now", outcome=RESOLVE),
    ),
)

step_06 = Step(
    id=6,
    text="I see. Can you try restarting your router? Unplug it for 30 seconds, then plug it back in.",
    options=(
        Option(text="Okay, I'll try that", outcome=RESOLVE),
        Option(text="I've already tried that, it didn't help", outcome=ESCALATE),
    ),
)

step_07 = Step(
    id=7,
    text="No problem. Can you locate your router and check if the power light is on?",
    options=(
        Option(text="Yes, the power light is on", outcome=5),
        Option(text="No, the power light is off", outcome=6),
    ),
)

step_12 = Step(
    id=12,
    text=(
        "If reconnecting didn't work, let's try resetting the hub to factory settings. "
        "Are you comfortable doing this? It will erase all settings."
    ),
    options=(
        Option(text="Yes, I'll try resetting the hub", outcome=RESOLVE),
        Option(text="I'd rather not reset the hub", outcome=ESCALATE),
    ),
)

# --- UNRESPONSIVE HUB BRANCH ---
step_03 = Step(
    id=3,
    text="For an unresponsive hub, let's try a few things. Have you tried restarting the hub?",
    options=(
        Option(text="Yes, I've tried restarting", outcome=8),
        Option(text="No, I haven't tried that yet", outcome=9),
    ),
)

step_08 = Step(
    id=8,
    text=(
        "If you've already restarted the hub, let's check the power source. "
        "Is it properly plugged in and the power outlet working?"
    ),
    options=(
        Option(text="Yes, it's properly plugged in and the outlet works", outcome=ESCALATE),
        Option(text="Let me double-check that", outcome=RESOLVE),
    ),
)

step_09 = Step(
    id=9,
    text=(
        "Okay, let's try restarting the hub. Unplug it, wait for 10 seconds, "
        "then plug it back in. Let me know if that helps."
    ),
    options=(
        Option(text="Okay, I'll try that now", outcome=RESOLVE),
        Option(text="That didn't solve the issue", outcome=8),
    ),
)

# --- DEVICE BRANCH ---
step_04 = Step(
    id=4,
    text=(
        "If devices aren't connecting to the hub, let's check a few things. "
        "Is the hub's status light on and stable?"
    ),
    options=(
        Option(text="Yes, the status light is on and stable", outcome=10),
        Option(text="No, the status light is off or blinking", outcome=11),
    ),
)

step_10 = Step(
    id=10,
    text=(
        "Good. Let's try removing a device from the hub and re-adding it. "
        "Can you try that with one of the devices?"
    ),
    options=(
        Option(text="Yes, I'll try that", outcome=RESOLVE),
        Option(text="I've already tried that, it didn't work", outcome=ESCALATE),
    ),
)

step_11 = Step(
    id=11,
    text=(
        "I see. First, let's try restarting the hub. Unplug it, wait for 10 seconds, "
        "then plug it back in. Did that help?"
    ),
    options=(
        Option(text="Yes, the status light is now stable", outcome=10),
        Option(text="No, the status light is still off or blinking", outcome=ESCALATE),
    ),
)

HARDCODED_STEPS = {
    step.id: step
    for step in (
        step_01, step_02, step_03, step_04, step_05, step_06,
        step_07, step_08, step_09, step_10, step_11, step_12,
    )
}

# ==============================================================================
# CANNED MESSAGES
# ==============================================================================

RESOLVED_MESSAGE = (
    "Great! I'm glad we could resolve your issue. "
    "Is there anything else I can help you with?"
)

ESCALATION_MESSAGE = (
    "Your chat has been escalated to human support. "
    "A representative will be with you shortly."
)

FALLBACK_MESSAGE = (
    "I understand you're having an issue. Could you please provide more details "
    "about the problem you're experiencing?"
)

# ==============================================================================
# FREE-TEXT RULES (first match wins)
# ==============================================================================

FREE_TEXT_RULES = [
    FreeTextRule(
        keywords=("wifi", "wi-fi"),
        response="I see you're having Wi-Fi issues. Let's troubleshoot that.",
        options=(
            Option(text="My hub won't connect to Wi-Fi", outcome=2),
            Option(text="My devices keep disconnecting from Wi-Fi", outcome=4),
            Option(text="My Wi-Fi signal is weak", outcome=7),
        ),
        anchor_step_id=2,
    ),
    FreeTextRule(
        keywords=("device",),
        response=(
            "I understand you're having issues with your devices. "
            "Can you specify which problem you're experiencing?"
        ),
        options=(
            Option(text="Device won't pair with the hub", outcome=4),
            Option(text="Device is unresponsive", outcome=10),
            Option(text="Device is behaving erratically", outcome=11),
        ),
        anchor_step_id=4,
    ),
    FreeTextRule(
        keywords=("unresponsive", "frozen", "not responding"),
        response="Sorry to hear your hub isn't responding. Let's get it back on track.",
        options=(
            Option(text="I've already restarted the hub", outcome=8),
            Option(text="I haven't restarted the hub yet", outcome=9),
        ),
        anchor_step_id=3,
    ),
]
