from __future__ import annotations

from xml.sax.saxutils import escape

from .models import Skill


def generate_skills_xml(skills: list[Skill]) -> str:
    """Formats a list of skills into an XML block for tool descriptions."""
    if not skills:
        return "<available_skills>\n<!-- No skills found -->\n</available_skills>"

    skills_entries = []
    for skill in skills:
        skill_xml = (
            "<skill>\n"
            f"<name>{escape(skill.qualified_name)}</name>\n"
            f"<description>{escape(skill.description)}</description>\n"
            "</skill>"
        )
        skills_entries.append(skill_xml)

    return "<available_skills>\n" + "\n".join(skills_entries) + "\n</available_skills>"


def generate_catalog_description(skills: list[Skill]) -> str:
    """Generates the catalog text an agent runtime shows before any skill is loaded."""
    skills_xml = generate_skills_xml(skills)

    description = f"""Load a skill document into the conversation

<skills_instructions>
When users ask you to perform tasks, check if any of the available skills below describe how to approach the task. Skills are written guidance: a workflow, examples, best practices and edge cases for one kind of task.

How to use skills:
- Request a skill by the name listed below (e.g. "writing-and-content/copywriting")
- When a skill is loaded, its full document becomes part of the conversation
- Follow the skill's workflow, and check your work against its best practices and edge cases

Important:
- Only use skills listed in <available_skills> below
- Do not load a skill that is already loaded in the conversation
- Skills are guidance only, they do not run anything on your behalf
</skills_instructions>

{skills_xml}
"""
    return description


def render_skill_prompt(skill: Skill) -> str:
    """Wrap a skill document in the envelope shown to the agent when it is loaded."""
    header = f'<command-message>The "{skill.qualified_name}" skill is loading</command-message>\n\n'
    if skill.path is not None:
        header += f"Base directory for this skill: {skill.path.parent}\n\n"

    content = f"# {skill.title or skill.name}\n\n{skill.description}\n\n{_body_without_title(skill)}"
    footer = (
        "\n\n---\n"
        "The skill has been loaded. Follow its workflow and apply its best practices to the task at hand."
    )
    return header + content.rstrip() + footer


def _body_without_title(skill: Skill) -> str:
    if not skill.title:
        return skill.body
    lines = skill.body.splitlines()
    for index, line in enumerate(lines):
        if line.lstrip().startswith("# ") and line.lstrip()[2:].strip() == skill.title:
            return "\n".join(lines[:index] + lines[index + 1 :]).strip("\n")
    return skill.body
