"""
Expert-written fallback text.

Used whenever the remote model is unavailable or its output is unusable.
Every category has explanations and advice, and unknown categories get a
generic entry, so lookups never come back empty.
"""

from typing import Dict, List

GENERIC_EXPLANATION = (
    "This security practice helps protect you from common cyber threats and keeps your "
    "personal information safe from criminals."
)

FALLBACK_EXPLANATIONS: Dict[str, str] = {
    "Account Security": (
        "Strong passwords and two-factor authentication prevent most account takeovers. Without "
        "proper account security, cybercriminals can easily access your personal information, "
        "financial accounts, and use your identity for further attacks."
    ),
    "Device Security": (
        "Keeping devices updated and protected prevents malware infections and unauthorized "
        "access. Outdated devices with security vulnerabilities are prime targets for "
        "cybercriminals who exploit known weaknesses."
    ),
    "Digital Awareness": (
        "Understanding common online scams and phishing techniques helps you avoid becoming a "
        "victim. Most successful cyber attacks rely on tricking people rather than technical "
        "exploits."
    ),
    "Privacy Protection": (
        "Controlling what information you share online reduces your risk of identity theft and "
        "targeted attacks. Too much personal information makes you an easy target for scammers."
    ),
    "Data Protection": (
        "Regular backups protect your important files from ransomware, device failure, and "
        "theft. Without backups, you could lose years of irreplaceable photos and documents "
        "forever."
    ),
    "Mobile & Smart Home": (
        "Securing connected devices prevents them from being hijacked and used to spy on you or "
        "attack other devices on your network. Unsecured smart devices are common entry points "
        "for hackers."
    ),
    "Personal Data Management": (
        "Monitoring where your information appears online helps you respond quickly to data "
        "breaches and identity theft attempts. Early detection allows you to protect yourself "
        "before serious damage occurs."
    ),
}

GENERIC_ADVICE: List[str] = [
    "Turn on two-factor authentication for your email and banking accounts first. They are "
    "the keys to the rest of your digital life.",
    "Use a password manager so every account gets its own strong password.",
    "Enable automatic updates on your phone and computer so security fixes arrive without "
    "you having to remember.",
]

FALLBACK_ADVICE: Dict[str, List[str]] = {
    "Account Security": [
        "Enable two-factor authentication on all important accounts like email, banking, and "
        "social media. This prevents 99% of account takeovers even if your password is stolen.",
        "Use a password manager to create unique passwords for every account. Password reuse is "
        "one of the biggest security risks that criminals exploit.",
        "Regularly review and remove access for old apps and services you no longer use. This "
        "reduces your attack surface and prevents unauthorized access.",
    ],
    "Device Security": [
        "Enable automatic updates on all devices to patch security vulnerabilities as soon as "
        "fixes are available. Outdated devices are easy targets for cybercriminals.",
        "Install security software on all devices including phones and tablets. Modern threats "
        "target all platforms and need comprehensive protection.",
        "Use a VPN when connecting to public Wi-Fi to prevent others from intercepting your "
        "internet traffic and personal information.",
    ],
    "Digital Awareness": [
        "Learn to recognize phishing emails and suspicious messages that try to steal your "
        "information. Look for urgent requests, spelling errors, and unexpected attachments.",
        "Verify unexpected communications by contacting organizations directly rather than "
        "clicking links or calling numbers in suspicious messages.",
        "Stay informed about current scams and cyber threats so you can recognize new attack "
        "methods targeting people in your situation.",
    ],
    "Privacy Protection": [
        "Review the privacy settings on your social media accounts and limit who can see your "
        "posts, friends list, and contact details.",
        "Check app permissions in your phone settings and remove camera, microphone, and "
        "location access from apps that don't need it.",
        "Use a privacy-focused browser or tracker blocker to stop companies from building a "
        "profile of your browsing habits.",
    ],
    "Data Protection": [
        "Back up important files to both a cloud service and an external drive, so a single "
        "failure or ransomware attack can't wipe out everything.",
        "Send sensitive documents through encrypted messaging or password-protected files "
        "instead of regular email.",
        "Delete old files and accounts holding personal information you no longer need. Data "
        "you don't keep can't be stolen.",
    ],
    "Mobile & Smart Home": [
        "Lock your phone with a strong passcode plus fingerprint or face recognition, and use "
        "at least six digits for any PIN.",
        "Change the default passwords on smart speakers, cameras, and doorbells, and keep their "
        "firmware updated.",
        "Put smart home devices on a separate guest Wi-Fi network so a compromised device can't "
        "reach your computers.",
    ],
    "Personal Data Management": [
        "Check Have I Been Pwned for your email addresses and sign up for breach notifications.",
        "Never share verification codes sent to your phone, even with someone claiming to be "
        "from your bank or support team.",
        "When a service you use reports a breach, change that password right away and anywhere "
        "you reused it.",
    ],
}


def fallback_explanation(category: str) -> str:
    return FALLBACK_EXPLANATIONS.get(category, GENERIC_EXPLANATION)


def fallback_advice(weak_areas: List[str], limit: int = 3) -> List[str]:
    """
    Expert advice for the given weak areas, in area order.

    Unknown areas contribute the generic list; duplicates are removed and the
    result is never empty.
    """
    advice: List[str] = []
    for area in weak_areas or ["General Security"]:
        for item in FALLBACK_ADVICE.get(area, GENERIC_ADVICE):
            if item not in advice:
                advice.append(item)
    return advice[:limit]
