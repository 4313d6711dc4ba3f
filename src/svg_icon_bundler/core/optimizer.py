"""SVG text optimizer.

Applies the configured rewrite steps from ``core.steps`` in their canonical
order. The optimizer is a pure function of its input and configuration: it
performs no I/O and never raises for string input.
"""

from svg_icon_bundler.constants import MAX_OPTIMIZER_PASSES, OPTIMIZER_STEPS
from svg_icon_bundler.core.steps import STEP_FUNCTIONS, RewriteStep
from svg_icon_bundler.models.config import OptimizerConfig


class SvgOptimizer:
    """Ordered pipeline of named text rewrite steps.

    The enabled steps are the configured capability set; their order is
    always the canonical one, whatever order the configuration lists them in.
    ``remove_viewbox`` only runs when ``preserve_viewbox`` is disabled.
    """

    def __init__(self, config: OptimizerConfig | None = None) -> None:
        """Initialize the optimizer.

        Args:
            config: Optimizer configuration, defaults when omitted.
        """
        self.config = config or OptimizerConfig()

        enabled = set(self.config.steps)
        if self.config.preserve_viewbox:
            enabled.discard("remove_viewbox")
        else:
            enabled.add("remove_viewbox")

        self._steps: list[tuple[str, RewriteStep]] = [
            (name, STEP_FUNCTIONS[name]) for name in OPTIMIZER_STEPS if name in enabled
        ]

    @property
    def step_names(self) -> list[str]:
        """Names of the steps that will run, in execution order."""
        return [name for name, _ in self._steps]

    def _run_pass(self, markup: str) -> str:
        for _, step in self._steps:
            markup = step(markup, self.config)
        return markup

    def optimize(self, markup: str) -> str:
        """Return a smaller, visually equivalent version of *markup*.

        With ``multipass`` enabled the pipeline is repeated until the output
        stops changing (at most ``MAX_OPTIMIZER_PASSES`` times), which makes
        ``optimize(optimize(s)) == optimize(s)``.

        Args:
            markup: Raw SVG markup.

        Returns:
            The optimized markup.
        """
        result = self._run_pass(markup)
        if not self.config.multipass:
            return result

        for _ in range(MAX_OPTIMIZER_PASSES - 1):
            next_result = self._run_pass(result)
            if next_result == result:
                break
            result = next_result
        return result


def optimize(markup: str, config: OptimizerConfig | None = None) -> str:
    """Optimize *markup* with a one-off :class:`SvgOptimizer`."""
    return SvgOptimizer(config).optimize(markup)
