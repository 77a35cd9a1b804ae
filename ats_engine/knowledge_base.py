"""
Skill Knowledge Base

Static registry of canonical skills, their spelling variants and category
membership. The lookup tables are built once at import time and exposed as
read-only mappings shared by every request.
"""

import logging
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .models import SkillCategory, SkillGroup

logger = logging.getLogger(__name__)


# canonical -> variants, grouped by category (None = uncategorised)
SKILL_REGISTRY: Dict[Optional[SkillCategory], Dict[str, List[str]]] = {
    SkillCategory.PROGRAMMING_LANGUAGES: {
        "javascript": ["js", "ecmascript", "es6", "es2015", "es2016", "es2017"],
        "typescript": ["ts"],
        "python": ["python3", "python2", "py"],
        "java": [],
        "c++": ["cpp", "cplusplus", "c plus plus"],
        "c#": ["csharp", "c sharp"],
        "ruby": ["rb"],
        "go": ["golang"],
        "rust": [],
        "swift": [],
        "kotlin": ["kt"],
        "php": [],
        "scala": [],
        "r": ["rlang", "r lang"],
        "dart": [],
        "elixir": [],
        "perl": [],
        "lua": [],
        "haskell": [],
        "clojure": [],
    },
    SkillCategory.FRONTEND: {
        "react": ["reactjs", "react.js", "react js"],
        "angular": ["angularjs", "angular.js", "angular js"],
        "vue": ["vuejs", "vue.js", "vue js"],
        "svelte": ["sveltejs", "svelte.js"],
        "next.js": ["nextjs", "next js", "next"],
        "nuxt.js": ["nuxtjs", "nuxt"],
        "html": ["html5"],
        "css": ["css3"],
        "sass": ["scss"],
        "tailwind": ["tailwindcss", "tailwind css"],
        "bootstrap": [],
        "jquery": [],
        "redux": [],
        "webpack": [],
        "vite": [],
    },
    SkillCategory.BACKEND: {
        "node.js": ["node", "nodejs", "node js"],
        "express": ["expressjs", "express.js"],
        "django": [],
        "flask": [],
        "fastapi": ["fast api"],
        "spring": ["spring boot", "springboot"],
        "rails": ["ruby on rails", "ror"],
        ".net": ["dotnet", "dot net", "asp.net"],
        "nestjs": ["nest.js", "nest js"],
        "fastify": [],
        "laravel": [],
        "gin": [],
        "fiber": [],
    },
    SkillCategory.DATABASES: {
        "sql": [],
        "postgresql": ["postgres", "psql", "pg"],
        "mysql": [],
        "mongodb": ["mongo"],
        "redis": [],
        "elasticsearch": ["elastic search", "elastic"],
        "dynamodb": ["dynamo db", "dynamo"],
        "cassandra": [],
        "sqlite": [],
        "firebase": [],
        "supabase": [],
        "prisma": [],
        "sequelize": [],
        "typeorm": [],
        "knex": ["knex.js"],
    },
    SkillCategory.DEVOPS: {
        "docker": [],
        "kubernetes": ["k8s", "kube"],
        "terraform": [],
        "ansible": [],
        "jenkins": [],
        "ci/cd": ["cicd", "ci cd", "ci-cd", "continuous integration", "continuous delivery"],
        "github actions": ["gh actions"],
        "gitlab ci": ["gitlab-ci"],
        "nginx": [],
        "linux": [],
        "bash": ["shell", "shell scripting"],
    },
    SkillCategory.CLOUD: {
        "aws": ["amazon web services"],
        "azure": ["microsoft azure"],
        "gcp": ["google cloud", "google cloud platform"],
    },
    SkillCategory.DATA_SCIENCE: {
        "machine learning": ["ml", "machine-learning"],
        "deep learning": ["dl", "deep-learning"],
        "natural language processing": ["nlp"],
        "computer vision": ["cv"],
        "tensorflow": ["tf"],
        "pytorch": ["torch"],
        "pandas": [],
        "numpy": [],
        "scikit-learn": ["sklearn", "scikit learn"],
        "data science": ["data-science"],
        "data engineering": ["data-engineering"],
        "spark": ["apache spark", "pyspark"],
    },
    SkillCategory.APIS: {
        "rest": ["restful", "rest api", "restful api"],
        "graphql": ["graph ql"],
        "microservices": ["micro services"],
        "api": [],
        "oauth": ["oauth2", "oauth 2.0"],
        "grpc": [],
        "websocket": ["websockets", "web socket", "socket.io"],
        "rabbitmq": ["rabbit mq"],
        "kafka": ["apache kafka"],
    },
    SkillCategory.MOBILE: {
        "react native": ["react-native", "reactnative"],
        "flutter": [],
        "ios": [],
        "android": [],
    },
    SkillCategory.TESTING: {
        "jest": [],
        "mocha": [],
        "cypress": [],
        "playwright": [],
        "selenium": [],
    },
    SkillCategory.SOFT_SKILLS: {
        "communication": [],
        "leadership": [],
        "problem solving": ["problem-solving"],
        "teamwork": ["team work", "collaboration"],
        "project management": ["project-management"],
    },
    # Tools & practices, BI & analytics
    None: {
        "git": ["github", "gitlab", "bitbucket"],
        "agile": [],
        "scrum": [],
        "jira": [],
        "figma": [],
        "photoshop": ["adobe photoshop"],
        "illustrator": ["adobe illustrator"],
        "excel": ["microsoft excel", "ms excel"],
        "power bi": ["powerbi", "power-bi"],
        "tableau": [],
        "looker": [],
    },
}


def build_skill_groups(registry: Mapping[Optional[SkillCategory], Mapping[str, Iterable[str]]]) -> Tuple[SkillGroup, ...]:
    """Turn the raw registry into immutable SkillGroup records."""
    groups = []
    for category, skills in registry.items():
        for canonical, variants in skills.items():
            groups.append(
                SkillGroup(
                    canonical=canonical.strip().lower(),
                    variants=frozenset(v.strip().lower() for v in variants),
                    category=category,
                )
            )
    return tuple(groups)


class SkillKnowledgeBase:
    """
    Read-only skill lookup tables.

    Invariant: every variant (and every canonical name) maps to exactly one
    canonical skill. Construction fails on a conflicting registry.
    """

    def __init__(self, groups: Iterable[SkillGroup]):
        self._groups = tuple(groups)

        variant_to_canonical: Dict[str, str] = {}
        by_canonical: Dict[str, SkillGroup] = {}

        for group in self._groups:
            for term in (group.canonical, *sorted(group.variants)):
                owner = variant_to_canonical.get(term)
                if owner is not None and owner != group.canonical:
                    raise ValueError(
                        f"Skill term '{term}' registered for both '{owner}' and '{group.canonical}'"
                    )
                variant_to_canonical[term] = group.canonical
            by_canonical[group.canonical] = group

        self._variant_to_canonical = MappingProxyType(variant_to_canonical)
        self._by_canonical = MappingProxyType(by_canonical)
        self._canonical_to_category = MappingProxyType(
            {c: g.category for c, g in by_canonical.items() if g.category is not None}
        )

        logger.debug(
            f"Skill knowledge base built: {len(self._groups)} groups, "
            f"{len(self._variant_to_canonical)} lookup terms"
        )

    @property
    def groups(self) -> Tuple[SkillGroup, ...]:
        return self._groups

    @property
    def variant_to_canonical(self) -> Mapping[str, str]:
        return self._variant_to_canonical

    @property
    def canonical_names(self) -> Tuple[str, ...]:
        return tuple(g.canonical for g in self._groups)

    def lookup(self, term: str) -> Optional[str]:
        return self._variant_to_canonical.get(term)

    def group(self, canonical: str) -> Optional[SkillGroup]:
        return self._by_canonical.get(canonical)

    def category(self, canonical: str) -> Optional[SkillCategory]:
        return self._canonical_to_category.get(canonical)

    def __len__(self) -> int:
        return len(self._groups)


KNOWLEDGE_BASE = SkillKnowledgeBase(build_skill_groups(SKILL_REGISTRY))
