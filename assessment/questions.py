# questions.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True)
class AnswerChoice:
    label: str
    score: int
    tip: str


@dataclass(frozen=True)
class Question:
    id: str
    category: str
    prompt: str
    choices: Tuple[AnswerChoice, ...]

    @property
    def max_score(self) -> int:
        return max(choice.score for choice in self.choices)

    def choice_for_score(self, score: int) -> AnswerChoice | None:
        """First choice carrying the given score (several choices may share one)."""
        for choice in self.choices:
            if choice.score == score:
                return choice
        return None


def _q(qid: str, category: str, prompt: str, *choices: Tuple[str, int, str]) -> Question:
    return Question(
        id=qid,
        category=category,
        prompt=prompt,
        choices=tuple(AnswerChoice(label=label, score=score, tip=tip) for label, score, tip in choices),
    )


# Order matters: index i of an answer record always refers to QUESTIONS[i],
# and bespoke recommendations are keyed by that index.
QUESTIONS: Tuple[Question, ...] = (
    # Account Security
    _q(
        "q1",
        "Account Security",
        "Do you use two-step verification (where you receive a code on your phone) for important accounts like email and banking?",
        ("Yes, for all my important accounts", 10,
         "This extra verification step stops 99% of account hacks, even if someone knows your password."),
        ("For some accounts", 5,
         "Start with your email, banking, and social media accounts. They're the most important to protect."),
        ("No, I don't use this", 0,
         "This simple step can protect you from most hacking attempts. Look for 'two-factor' or '2FA' in security settings."),
    ),
    _q(
        "q2",
        "Account Security",
        "How do you keep track of your passwords?",
        ("I use a password manager app", 10,
         "Password managers create and remember strong, unique passwords for all your accounts."),
        ("I save them in my browser", 7,
         "Browser password storage is convenient but less secure than dedicated password managers."),
        ("I use a pattern I change for each site", 3,
         "Password patterns can be figured out if one of your accounts is hacked."),
        ("I use the same password (or a few) everywhere", 0,
         "Using the same password is risky. If one site is hacked, all your accounts are at risk."),
    ),
    _q(
        "q3",
        "Account Security",
        "Do you review and remove access for apps and services you no longer use?",
        ("Yes, I regularly clean up old accounts and permissions", 10,
         "Removing old access reduces your risk if those services are ever hacked."),
        ("Sometimes, when I think about it", 5,
         "Try scheduling a quarterly digital cleanup day on your calendar."),
        ("No, I keep everything active", 0,
         "Old, forgotten accounts can be security risks. It's like leaving spare keys around."),
    ),

    # Data Protection
    _q(
        "q4",
        "Data Protection",
        "Do you protect sensitive information when sending it online?",
        ("Yes, I use secure methods (password-protected files, encrypted apps)", 10,
         "Protecting sensitive info is like using an envelope instead of a postcard."),
        ("Sometimes, for certain things", 5,
         "Consider using secure messaging apps or password-protected files for sensitive information."),
        ("No, I just send things normally", 0,
         "Regular email and texts can be intercepted. Use secure options for private information."),
    ),
    _q(
        "q5",
        "Data Protection",
        "Do you keep backups of your important files, photos, and documents?",
        ("Yes, in multiple places (like cloud + external drive)", 10,
         "Having backups in different places protects you from device failure, theft, or ransomware."),
        ("Yes, but only in one place", 5,
         "Consider adding a second backup location for extra protection."),
        ("No, I don't have backups", 0,
         "Without backups, a lost phone or broken computer could mean losing everything forever."),
    ),
    _q(
        "q6",
        "Data Protection",
        "How often do you delete old files and data you no longer need?",
        ("Regularly, following a system", 10,
         "Regularly removing old data reduces your risk if your accounts are ever hacked."),
        ("Occasionally, when I think of it", 5,
         "Set reminders to clean up old files, especially those with personal information."),
        ("I keep everything indefinitely", 0,
         "Keeping everything increases your risk: the more data stored, the more can be stolen."),
    ),

    # Device Security
    _q(
        "q7",
        "Device Security",
        "Do you keep your devices (phone, computer, tablets) updated?",
        ("Yes, I update everything promptly", 10,
         "Updates fix security holes that hackers can exploit."),
        ("I update eventually, but often delay", 7,
         "Try enabling automatic updates so you don't have to remember."),
        ("I update only when I have to", 3,
         "Delaying updates leaves your devices vulnerable to known security problems."),
        ("I rarely or never update", 0,
         "Outdated devices are easy targets. Updates are like locks for digital doors."),
    ),
    _q(
        "q8",
        "Device Security",
        "When using public Wi-Fi (coffee shops, airports), do you take extra security steps?",
        ("Yes, I use a VPN or mobile data instead", 10,
         "Public Wi-Fi is like having a conversation in a crowded room. A VPN creates a private space."),
        ("Sometimes I'm careful", 5,
         "Avoid banking or shopping on public Wi-Fi unless you're using a VPN (Virtual Private Network)."),
        ("No, I connect normally", 0,
         "Public Wi-Fi can be monitored by others. Use a VPN app or stick to mobile data for sensitive activities."),
    ),
    _q(
        "q9",
        "Device Security",
        "Do you have protection against viruses and malware on your devices?",
        ("Yes, on all my devices", 10,
         "Security software is your digital immune system against threats."),
        ("On some devices", 5,
         "Every connected device needs protection, even smartphones and tablets."),
        ("No protection installed", 0,
         "Unprotected devices are easily infected. Many good security options are free or built-in."),
    ),

    # Digital Awareness
    _q(
        "q10",
        "Digital Awareness",
        "Can you spot fake emails or messages trying to trick you?",
        ("Yes, I check carefully before clicking links or attachments", 10,
         "Being skeptical of unexpected messages is your best defense against scams."),
        ("Sometimes I'm unsure", 5,
         "When in doubt, contact the company directly using their official website. Don't use links in the email."),
        ("I've fallen for scams before", 0,
         "Check for misspellings, odd email addresses, and urgent requests. These are warning signs."),
    ),
    _q(
        "q11",
        "Digital Awareness",
        "Do you have a plan for what to do if your accounts are hacked?",
        ("Yes, I know exactly what steps to take", 10,
         "Having a plan ready helps you respond quickly if something happens."),
        ("I have a general idea", 5,
         "Write down the basic steps: change passwords, contact support, check for unauthorized changes."),
        ("No plan at all", 0,
         "Create a simple checklist now so you're not panicking if something happens."),
    ),
    _q(
        "q12",
        "Digital Awareness",
        "Have you set up alerts for unusual activity on your important accounts?",
        ("Yes, I get notifications for logins or changes", 10,
         "Alerts help you catch problems early before serious damage occurs."),
        ("On some accounts", 5,
         "Start with email, banking, and shopping accounts. They're common targets."),
        ("No alerts set up", 0,
         "Activity alerts are like security cameras for your accounts. They let you know when something's wrong."),
    ),

    # Privacy Protection
    _q(
        "q13",
        "Privacy Protection",
        "Do you check and adjust privacy settings on your social media and online accounts?",
        ("Yes, I review them regularly", 10,
         "Companies often change privacy settings. Regular checks help maintain your privacy."),
        ("Sometimes I look at them", 5,
         "Set a reminder to check privacy settings every few months, especially after app updates."),
        ("I just use default settings", 0,
         "Default settings usually share more of your information than necessary."),
    ),
    _q(
        "q14",
        "Privacy Protection",
        "When apps ask for permission to access your camera, location, contacts, etc., what do you do?",
        ("I only allow what the app truly needs to function", 10,
         "Being selective about permissions helps protect your personal information."),
        ("I sometimes check permissions", 5,
         "Regularly review app permissions in your device settings and remove unnecessary access."),
        ("I accept whatever the app asks for", 0,
         "Many apps ask for more access than they need. It's okay to say no."),
    ),
    _q(
        "q15",
        "Privacy Protection",
        "How do you handle website cookies and tracking?",
        ("I block unnecessary trackers and clear cookies regularly", 10,
         "Controlling cookies helps prevent companies from building detailed profiles about you."),
        ("I accept only necessary cookies when possible", 7,
         "Privacy-focused browsers like Firefox or Brave can help manage tracking automatically."),
        ("I accept all cookies without thinking about it", 0,
         "Cookies can track your activity across different websites, building a profile of your habits."),
    ),

    # Mobile & Smart Home
    _q(
        "q16",
        "Mobile & Smart Home",
        "How do you lock your phone or tablet?",
        ("With fingerprint/face recognition AND a strong passcode", 10,
         "Your phone contains your digital life. Protect it with multiple security layers."),
        ("With a simple PIN or pattern", 3,
         "Use at least 6 digits for PINs. Patterns can be guessed by watching you or from screen smudges."),
        ("I don't lock my devices", 0,
         "An unlocked phone gives access to your emails, accounts, and personal information."),
    ),
    _q(
        "q17",
        "Mobile & Smart Home",
        "For smart home devices (speakers, cameras, TV, doorbell), what security steps do you take?",
        ("Changed passwords, regular updates, separate Wi-Fi network", 10,
         "Smart devices can be entry points to your home network. Extra protection is important."),
        ("Changed the default passwords", 5,
         "Also enable automatic updates and consider creating a guest network just for smart devices."),
        ("I use them with default settings", 0,
         "Default passwords are often public knowledge and easily hacked."),
    ),

    # Personal Data Management
    _q(
        "q18",
        "Personal Data Management",
        "Do you check if your email or accounts have been in data breaches?",
        ("Yes, I use breach notification services", 10,
         "Services like 'Have I Been Pwned' can alert you if your information appears in known breaches."),
        ("I've checked once or twice", 5,
         "Set up alerts for future breaches to stay informed about your exposed data."),
        ("Never checked", 0,
         "Data breaches happen frequently. Knowing which accounts are affected helps you protect yourself."),
    ),
)


def get_questions() -> Tuple[Question, ...]:
    """Get the full question bank in declaration order."""
    return QUESTIONS


def get_question(index: int, questions: Tuple[Question, ...] = QUESTIONS) -> Question:
    """Get a question by index."""
    if 0 <= index < len(questions):
        return questions[index]
    raise IndexError(f"Question index {index} out of range")


def get_question_by_id(question_id: str, questions: Tuple[Question, ...] = QUESTIONS) -> Question:
    """Get a question by ID."""
    for q in questions:
        if q.id == question_id:
            return q
    raise ValueError(f"Question with ID '{question_id}' not found")


def categories(questions: Tuple[Question, ...] = QUESTIONS) -> List[str]:
    """Distinct categories in the order they are first declared."""
    seen: List[str] = []
    for q in questions:
        if q.category not in seen:
            seen.append(q.category)
    return seen


def max_score(questions: Tuple[Question, ...] = QUESTIONS) -> int:
    return 10 * len(questions)
