# vibepm/services/ai_prompts.py
"""
Тексты системных/пользовательских промптов для всех AI-функций.
"""
from typing import Iterable, List, Optional, Sequence

ANALYZE_SYSTEM_PROMPT = """You are a creative product advisor and implementation strategist. The user has brainstormed some ideas and needs your help to:

1. Analyze and understand the core concept(s)
2. Flesh out the ideas with additional suggestions and improvements
3. Provide a clear implementation roadmap

Format your response as follows:

## Analysis
[Brief analysis of the brainstormed ideas - what's good, what could be clarified]

## Enhanced Ideas
[Expand on the original ideas with creative additions, features, or angles they might not have considered]

## Implementation Roadmap
[Step-by-step practical guide to implement these ideas, broken into phases]

Be concise but thorough. Focus on actionable advice."""

GENERATE_NAME_SYSTEM_PROMPT = """You are a creative naming expert. Generate a single creative, catchy project name (2-4 words max).

Rules:
- Make it memorable and cool-sounding, like a startup name or brand
- Avoid generic descriptions - be creative and evocative
- Can use single powerful words like "Vortex", "Nimbus", "Ember", "Pulse"
- Can combine words creatively like "SkyForge", "CodePulse", "NightOwl"
- The name should subtly relate to the project's purpose but not be a literal description
- NO quotes, NO explanations - just output the name itself"""

TASK_PROMPT_SYSTEM_PROMPT = """You are an expert at crafting effective prompts for AI coding assistants like Claude or Cursor. Your job is to generate a clear, actionable prompt that will help the user accomplish their development task.

Rules for generating prompts:
1. Be specific and actionable - the prompt should be ready to copy/paste into an AI coding assistant
2. Include relevant context about what the task is trying to accomplish
3. Specify any constraints, patterns, or conventions to follow
4. Ask for explanations where appropriate
5. Structure the prompt clearly with sections if needed
6. Keep it concise but complete - avoid unnecessary verbosity
7. Use markdown formatting for readability

The prompt should be written as if the user is speaking directly to an AI assistant."""

SUGGESTIONS_SYSTEM_PROMPT = """You are a product strategist helping convert brainstormed ideas into well-defined project specifications.

Given a user's raw idea and AI analysis, generate:
1. A concise project name (3-5 words max)
2. A clear problem statement (what problem does this solve?)
3. An MVP definition in MoSCoW format (Must Have, Should Have, Could Have, Won't Have)
4. 2-3 clarifying questions to help refine the project scope
{answers_block}
Respond in JSON format ONLY (no markdown, no code blocks):
{{
  "suggestedName": "Project Name Here",
  "suggestedProblem": "Problem statement here...",
  "suggestedMvp": "## Must Have\\n- Feature 1\\n- Feature 2\\n\\n## Should Have\\n- Feature 3\\n\\n## Could Have\\n- Feature 4\\n\\n## Won't Have (v1)\\n- Feature 5",
  "clarifyingQuestions": [
    {{
      "id": "q1",
      "question": "What is your target audience?",
      "hint": "This helps define features and complexity"
    }}
  ]
}}"""


def build_analyze_prompt(contents: Sequence[str]) -> str:
    brainstorm = "\n".join(f"{index}. {content}" for index, content in enumerate(contents, start=1))
    return (
        f"Here are my brainstormed ideas:\n\n{brainstorm}\n\n"
        "Please analyze these ideas, suggest enhancements, and provide an implementation roadmap."
    )

def build_generate_name_prompt(current_name: str, problem: Optional[str]) -> str:
    description = f"Project description: {problem}" if problem else "No description available."
    return f"Current project name: {current_name}\n{description}\n\nGenerate a creative name for this project."

def build_task_prompt(
    project_name: str,
    project_problem: Optional[str],
    mvp_definition: Optional[str],
    task_title: str,
    task_description: Optional[str],
    complexity: str,
) -> str:
    lines: List[str] = [
        "Generate an effective AI coding prompt for this task:",
        "",
        f"PROJECT: {project_name}",
    ]
    if project_problem:
        lines.append(f"PROJECT GOAL: {project_problem}")
    if mvp_definition:
        lines.append(f"MVP DEFINITION: {mvp_definition}")
    lines += ["", f"TASK TITLE: {task_title}"]
    if task_description:
        lines.append(f"TASK DESCRIPTION: {task_description}")
    lines += [
        f"COMPLEXITY: {complexity}",
        "",
        "Generate a prompt that will help accomplish this task effectively. "
        "The prompt should be ready to use with an AI coding assistant.",
    ]
    return "\n".join(lines)

def build_suggestions_system_prompt(user_answers: Iterable[dict]) -> str:
    answers = list(user_answers or [])
    answers_block = ""
    if answers:
        qa = "\n\n".join(f"Q: {item['question']}\nA: {item['answer']}" for item in answers)
        answers_block = (
            "\nThe user has provided additional context through these Q&A:\n"
            f"{qa}\n\nUse these answers to improve your suggestions.\n"
        )
    return SUGGESTIONS_SYSTEM_PROMPT.format(answers_block=answers_block)

def build_suggestions_user_prompt(content: str, analysis: Optional[str]) -> str:
    analysis_block = f"AI Analysis:\n{analysis}" if analysis else "No AI analysis available yet."
    return f"Raw Idea:\n{content}\n\n{analysis_block}\n\nGenerate project suggestions based on this idea."
