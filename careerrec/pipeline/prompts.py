"""System and user prompts for job and course recommendation."""

from careerrec.core.schemas import CandidateProfile

JOB_SYSTEM_PROMPT = (
    "You are an expert job recommendation assistant and an adept job sourcer.\n\n"
    "Find relevant job openings for the candidate. Skills are the primary "
    "matching factor; recent experience and any target role come second.\n"
    "Aim for 5 to 10 diverse recommendations, but return any suitable matches "
    "you find even if fewer than 5.\n\n"
    "For EVERY job include ALL of these fields:\n"
    '  title (string), company (string), location (string, e.g. "Chennai, India" '
    'or "Remote"), keyRequiredSkills (list of 3-5 strings), description '
    "(2-3 sentences), applicationLink (absolute URL), matchScore (number 0-100 "
    "reflecting skill alignment), platform (LinkedIn, Naukri, Indeed, Glassdoor, "
    "SimplyHired)\n\n"
    "Only include jobs with a matchScore of 30 or higher. If nothing qualifies, "
    "return an empty list.\n\n"
    "Return ONLY a JSON object (no markdown, no explanation):\n"
    '{"jobs": [ ... ]}'
)

COURSE_SYSTEM_PROMPT = (
    "You are an expert career advisor and learning strategist.\n\n"
    "Suggest 3-5 well-regarded courses or learning resources that close the "
    "candidate's skill gaps for the target role.\n\n"
    "For EVERY recommendation include:\n"
    "  title (string), platform (Coursera, Udemy, edX, YouTube channel, official "
    "documentation site, ...), description (1-2 sentences on why it is relevant), "
    "url (direct or search URL), focusArea (the skill it addresses), "
    "relevanceScore (number 0.0-1.0)\n\n"
    "Also give short general advice on how to approach learning for the role.\n\n"
    "Return ONLY a JSON object (no markdown, no explanation):\n"
    '{"recommendations": [ ... ], "generalAdvice": "<string>"}'
)

# Checked in order; the first title found in the summary wins.
COMMON_TITLES = (
    "Software Engineer", "Developer", "Programmer", "Architect",
    "Data Scientist", "Data Analyst", "Business Analyst",
    "Project Manager", "Product Manager", "Program Manager",
    "Designer", "UX Designer", "UI Designer",
    "DevOps Engineer", "SRE", "System Administrator",
    "QA Engineer", "Test Engineer", "Quality Assurance",
    "Marketing", "Sales", "Customer Support",
    "HR", "Human Resources", "Recruiter",
)

COMMON_CITIES = (
    "Chennai", "Bangalore", "Hyderabad", "Coimbatore", "Trichy",
    "Mumbai", "Delhi", "Kolkata", "Pune", "Ahmedabad",
)


def infer_target_role(experience_summary: str) -> str | None:
    """Return the first common job title mentioned in the summary (case-sensitive)."""
    for title in COMMON_TITLES:
        if title in experience_summary:
            return title
    return None


def infer_location(experience_summary: str) -> str | None:
    """Return "<City>, India" for the first known city mentioned in the summary."""
    for city in COMMON_CITIES:
        if city in experience_summary:
            return f"{city}, India"
    return None


def build_job_prompt(profile: CandidateProfile) -> str:
    """Assemble the job recommendation user prompt from the profile."""
    skills = (
        ", ".join(profile.skills)
        if profile.skills
        else "No specific skills listed. Your ability to find jobs will be limited without skills."
    )
    summary = profile.experience_summary.strip() or "not provided"

    prompt = (
        "CANDIDATE RESUME DETAILS\n"
        f"Skills: {skills}\n"
        f"Most recent experience summary: {summary}\n"
    )

    if profile.projects:
        prompt += "Projects summary:\n"
        prompt += "".join(f"- {p}\n" for p in profile.projects)

    if profile.target_role:
        prompt += (
            "Stated target role (consider it, but skill match is the primary driver): "
            f"{profile.target_role}\n"
        )
    else:
        role = infer_target_role(profile.experience_summary)
        if role:
            prompt += f"Likely role based on experience: {role}\n"

    location = infer_location(profile.experience_summary)
    if location:
        prompt += f"Preferred location (from experience): {location}\n"

    return prompt


def build_course_prompt(profile: CandidateProfile) -> str:
    """Assemble the course recommendation user prompt from the profile."""
    skills = ", ".join(profile.skills) if profile.skills else "Not specified"
    role = (
        profile.target_role
        or infer_target_role(profile.experience_summary)
        or "not specified"
    )

    prompt = (
        "USER PROFILE\n"
        f"Current skills: {skills}\n"
        f"Target role: {role}\n"
    )
    if profile.skill_gaps:
        prompt += f"Identified skill gaps: {', '.join(profile.skill_gaps)}\n"
    if profile.areas_for_improvement:
        prompt += (
            f"Areas for general improvement: {', '.join(profile.areas_for_improvement)}\n"
        )
    return prompt
