# resume/ai/templates.py
from resume.ai.prompt_builder import PromptTemplate

EXTRACTION = "extraction"
ANALYSIS = "analysis"
RECOMMENDATION = "recommendation"
COMPARISON = "comparison"
CORRECTION = "correction"


EXTRACTION_TEMPLATE = PromptTemplate(EXTRACTION, """You are an expert resume analyst and information extractor.
Read the resume text below and produce one clean, valid JSON object that captures
everything relevant about the candidate.

Rules:
- Be complete: education, work experience, internships, projects, certifications,
  skills, spoken languages and social or community involvement.
- Use null for any value the resume does not state. Never drop a field.
- Use an empty array for a list with no items.
- Use YYYY-MM for dates when the month is known.
- work[].type must be one of: Full-Time, Internship, Part-Time, Freelance, or null.
- Do not invent anything that is not in the text.

Resume text:
---
<<resume_text>>
---

Return JSON with exactly this structure:
{
  "about": {
    "name": "",
    "email": "",
    "phone": "",
    "address": "",
    "links": "",
    "linkedin": "",
    "github": "",
    "portfolio": "",
    "role": "",
    "summary": "",
    "otherProfiles": []
  },
  "education": [
    {"degree": "", "school": "", "startYr": "", "endYr": "", "grade": ""}
  ],
  "work": [
    {
      "position": "",
      "company": "",
      "startDate": "",
      "endDate": "",
      "description": "",
      "type": "Full-Time"
    }
  ],
  "projects": [
    {"name": "", "description": "", "github": "", "technologies": [], "url": ""}
  ],
  "skills": [],
  "languages": [
    {"name": "", "level": ""}
  ],
  "certifications": [
    {"title": "", "issuer": "", "year": ""}
  ],
  "socialActivities": [
    {"role": "", "organization": "", "description": ""}
  ]
}

Output only the JSON object, with no text before or after it.""")


ANALYSIS_TEMPLATE = PromptTemplate(ANALYSIS, """You are a senior resume reviewer with long experience in HR, technical hiring
and career coaching.

Analyze the resume JSON below. Report its weaknesses, concrete improvements,
mistakes and missing sections, and give it an overall score from 0 to 100.

Rules:
1. Ground every finding in the resume JSON. Never invent experience, skills or data.
2. Any section that is empty or absent goes into missingSections
   (for example "education" or "work").
3. Weaknesses must point at something actually in the resume (vague descriptions,
   missing dates, and so on).
4. Improvements must be actionable ("Add metrics to project descriptions").
5. Mistakes cover formatting problems, typos, inconsistencies and broken date ranges.
6. Score bands:
   - 0-39: very weak
   - 40-59: needs significant improvement
   - 60-79: decent but missing important elements
   - 80-89: strong with minor issues
   - 90-100: excellent
7. score is an integer.

Resume JSON:
<<resume_json>>

Return JSON with exactly this structure:
{
  "weaknesses": [],
  "improvements": [],
  "missingSections": [],
  "mistakes": [],
  "score": 0,
  "overallFeedback": ""
}

Output only the JSON object. No markdown, no commentary.""")


RECOMMENDATION_TEMPLATE = PromptTemplate(RECOMMENDATION, """You are a professional career advisor. Study the selected resumes and suggest
courses, certifications, trainings and opportunities that fit the candidate.

Selected resumes (JSON array):
<<resumes_json>>

User filters (JSON object):
<<filters_json>>

Apply the filters strictly. An empty or null filter means no constraint:
- types: only include these recommendation types
- levels: only include these levels
- priceRange: price must fall between min and max
- free: when true, price must be 0
- durations: SHORT is under 1 month, MEDIUM is 1-3 months, LONG is over 3 months
- providers: only include these providers
- searchQuery: title or description must match this text

Output rules:
1. Output a JSON array of recommendation objects and nothing else.
2. Every object has every field below.
3. type is one of COURSE, CERTIFICATION, TRAINING, OPPORTUNITY.
4. level is one of BEGINNER, INTERMEDIATE, ADVANCED.
5. matchScore and price are numbers.
6. Strings contain no line breaks.
7. If nothing matches the filters, output an empty array: []

Item structure:
{
  "type": "COURSE",
  "title": "",
  "provider": "",
  "description": "",
  "matchScore": 0,
  "level": "BEGINNER",
  "duration": "",
  "price": 0,
  "url": "",
  "skills": [],
  "whyRecommended": "",
  "category": null
}

Output only the JSON array.""")


COMPARISON_TEMPLATE = PromptTemplate(COMPARISON, """You are a professional career analyst. Compare the resumes below and produce
a structured JSON comparison. Each resume carries its resumeId; use those ids
wherever the structure asks for one.

Resumes (JSON array):
<<resumes_json>>

Cover:
- strengths and weaknesses of each resume
- common skills and skills unique to each resume
- depth, relevance and diversity of experience
- education
- which resume suits which roles
- a final verdict on which resume is stronger for which goals

Output rules:
1. Output one JSON object and nothing else.
2. Follow the structure below exactly.
3. uniqueSkillsByResume maps every resumeId to its list of unique skills.
4. Strings contain no line breaks.

Structure:
{
  "resumeSummaries": [
    {
      "resumeId": "",
      "keyStrengths": [],
      "keyWeaknesses": [],
      "uniqueSkills": [],
      "notableExperiences": []
    }
  ],
  "comparison": {
    "commonSkills": [],
    "uniqueSkillsByResume": {},
    "experienceComparison": {"strongerExperienceResumeId": null, "summary": ""},
    "educationComparison": {"strongerEducationResumeId": null, "summary": ""},
    "roleSuitability": [
      {"role": "", "bestResumeId": "", "reason": ""}
    ]
  },
  "finalVerdict": ""
}

Output only the JSON object.""")


CORRECTION_TEMPLATE = PromptTemplate(CORRECTION, """Your previous reply could not be used.

Problem: <<error>>

Answer the original request again. Output only valid JSON that follows the
requested structure exactly, with no prose and no code fences.

Original request:
<<original_prompt>>""")


DEFAULT_TEMPLATES = {
    t.template_id: t
    for t in (
        EXTRACTION_TEMPLATE,
        ANALYSIS_TEMPLATE,
        RECOMMENDATION_TEMPLATE,
        COMPARISON_TEMPLATE,
        CORRECTION_TEMPLATE,
    )
}
