"""Variant generation: single-axis examples plus bounded multi-axis permutations."""

from __future__ import annotations

from itertools import combinations, product
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..logging import get_logger
from ..models import ComponentMetadata, PropMetadata, VariantExample
from .snippets import render_code_snippet, render_title
from .values import DEFAULT_VALUES, infer_default_value


class VariantGenerator:
    """Turns component metadata into an ordered, size-bounded list of examples."""

    PERMUTATION_CEILING = 10
    VALUES_PER_AXIS = 2
    MAX_AXES_PER_PERMUTATION = 3

    def __init__(
        self,
        max_permutations: int = 20,
        default_values: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.max_permutations = max_permutations
        self.default_values: Dict[str, Any] = dict(DEFAULT_VALUES)
        if default_values:
            self.default_values.update(default_values)
        self.logger = get_logger("generator")

    def generate_variants(self, component: ComponentMetadata) -> List[VariantExample]:
        if not component.props:
            return []
        axes = self.find_variant_axes(component.props)
        if not axes:
            return [self.generate_default_example(component)]

        examples = self._single_axis_examples(component, axes)
        if len(axes) >= 2:
            examples.extend(self._permutation_examples(component, axes))
        if len(examples) > self.max_permutations:
            self.logger.debug(
                "Truncating %d variants of %s to %d", len(examples), component.name, self.max_permutations
            )
        return examples[: self.max_permutations]

    @staticmethod
    def find_variant_axes(props: Mapping[str, PropMetadata]) -> List[str]:
        return [
            name
            for name, meta in props.items()
            if meta.render_variants and meta.values and not meta.hide_in_docs
        ]

    def generate_default_example(self, component: ComponentMetadata) -> VariantExample:
        props: Dict[str, Any] = {}
        for name, meta in component.props.items():
            if meta.hide_in_docs or meta.optional:
                continue
            value = infer_default_value(name, meta, self.default_values)
            if value is not None:
                props[name] = value
        return self._create_example(component, props, [])

    def _single_axis_examples(self, component: ComponentMetadata, axes: Sequence[str]) -> List[VariantExample]:
        examples: List[VariantExample] = []
        for axis in axes:
            for value in component.props[axis].values or []:
                props = self._fill_props({axis: value}, component.props)
                examples.append(self._create_example(component, props, [axis]))
        return examples

    def _permutation_examples(self, component: ComponentMetadata, axes: Sequence[str]) -> List[VariantExample]:
        examples: List[VariantExample] = []
        largest = min(len(axes), self.MAX_AXES_PER_PERMUTATION)
        for size in range(2, largest + 1):
            for subset in combinations(axes, size):
                if len(examples) >= self.PERMUTATION_CEILING:
                    return examples
                if self._is_excluded(subset, component.props):
                    self.logger.debug("Skipping excluded combination %s", ", ".join(subset))
                    continue
                value_lists = [
                    (component.props[axis].values or [])[: self.VALUES_PER_AXIS] for axis in subset
                ]
                for combo in product(*value_lists):
                    if len(examples) >= self.PERMUTATION_CEILING:
                        return examples
                    props = self._fill_props(dict(zip(subset, combo)), component.props)
                    examples.append(self._create_example(component, props, list(subset), is_permutation=True))
        return examples

    @staticmethod
    def _is_excluded(subset: Sequence[str], props: Mapping[str, PropMetadata]) -> bool:
        for first, second in combinations(subset, 2):
            if second in props[first].excluded_with or first in props[second].excluded_with:
                return True
        return False

    def _fill_props(self, assigned: Dict[str, Any], props: Mapping[str, PropMetadata]) -> Dict[str, Any]:
        result = dict(assigned)
        for name, meta in props.items():
            if name in result or meta.hide_in_docs:
                continue
            if not meta.optional or meta.default:
                value = infer_default_value(name, meta, self.default_values)
                if value is not None:
                    result[name] = value
        return result

    def _create_example(
        self,
        component: ComponentMetadata,
        props: Dict[str, Any],
        axes: List[str],
        *,
        is_permutation: bool = False,
    ) -> VariantExample:
        return VariantExample(
            props=props,
            code=render_code_snippet(component.name, props),
            title=render_title(component.props, props, axes),
            is_permutation=is_permutation,
            combined_props=list(axes) if is_permutation else [],
        )


__all__ = ["VariantGenerator"]
