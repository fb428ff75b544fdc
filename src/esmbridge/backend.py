# src/esmbridge/backend.py
"""Bundling backends: take one generated config and produce its bundle."""

import asyncio
from pathlib import Path
from typing import Protocol

from .constants import DEFAULT_NODE_EXECUTABLE
from .errors import BackendBuildError
from .logs import getAppLogger
from .scratch import ScratchDir
from .webpack_config import WebpackConfig, dump_config, entry_name


RUNNER_ARTIFACT = "webpackRunner.js"

# Externals keys containing `*` match one path segment per `*`; the matched
# segments fill the `*` placeholders of the URL in order.
WEBPACK_EXTERNALS_SOURCE = """\
function toWebpackExternals(externals) {
	const exact = {};
	const patterns = [];

	for (const [key, url] of Object.entries(externals)) {
		if (key.includes('*')) {
			const source = key
				.split('*')
				.map((part) => part.replace(/[.*+?^${}()|[\\]\\\\]/g, '\\\\$&'))
				.join('([^/]+)');

			patterns.push([new RegExp(`^${source}$`), url]);
		}
		else {
			exact[key] = url;
		}
	}

	return [
		exact,
		({request}, callback) => {
			for (const [regexp, url] of patterns) {
				const match = regexp.exec(request);

				if (match) {
					let i = 1;

					return callback(null, url.replace(/\\*/g, () => match[i++]));
				}
			}

			callback();
		},
	];
}
"""

# argv: [configPath, report ("true"/"false"), projectDir]
WEBPACK_RUNNER_SOURCE = (
    """\
const fs = require('fs');
const path = require('path');
const {createRequire} = require('module');

const [configPath, report, projectDir] = process.argv.slice(2);
const projectRequire = createRequire(path.join(projectDir, 'package.json'));

function revive(value) {
	if (Array.isArray(value)) {
		return value.map(revive);
	}
	if (value && typeof value === 'object') {
		if (typeof value.$regexp === 'string') {
			return new RegExp(value.$regexp);
		}
		if (typeof value.$plugin === 'string') {
			const Plugin = projectRequire(value.$plugin);

			return new Plugin(revive(value.options));
		}

		return Object.fromEntries(
			Object.entries(value).map(([key, item]) => [key, revive(item)])
		);
	}

	return value;
}

function resolveLoaders(rules) {
	for (const rule of rules) {
		const uses = Array.isArray(rule.use) ? rule.use : [rule.use];

		for (const use of uses) {
			use.loader = projectRequire.resolve(use.loader);
		}
	}
}

"""
    + WEBPACK_EXTERNALS_SOURCE
    + """
const config = revive(JSON.parse(fs.readFileSync(configPath, 'utf8')));

resolveLoaders(config.module.rules);
config.externals = toWebpackExternals(config.externals);

projectRequire('webpack')(config, (error, stats) => {
	if (error) {
		console.error(error.stack || error);
		process.exit(1);
	}

	if (report === 'true') {
		console.log(stats.toString({colors: false}));
	}

	if (stats.hasErrors()) {
		console.error(stats.toString('errors-only'));
		process.exit(1);
	}

	if (stats.hasWarnings()) {
		console.warn(stats.toString('errors-warnings'));
	}
});
"""
)


class Backend(Protocol):
    async def run(self, config: WebpackConfig, *, report: bool) -> None: ...


class WebpackBackend:
    """Run webpack under Node.js, one subprocess per config."""

    def __init__(
        self,
        project_dir: Path,
        scratch: ScratchDir,
        *,
        node: str = DEFAULT_NODE_EXECUTABLE,
    ) -> None:
        self.project_dir = project_dir
        self.scratch = scratch
        self.node = node
        self._runner_path: Path | None = None

    def _runner(self) -> Path:
        if self._runner_path is None:
            self._runner_path = self.scratch.create_temp_file(
                RUNNER_ARTIFACT, WEBPACK_RUNNER_SOURCE
            )
        return self._runner_path

    async def run(self, config: WebpackConfig, *, report: bool) -> None:
        logger = getAppLogger()
        entry = entry_name(config)
        config_path = self.scratch.create_temp_file(
            f"backend/{entry}.config.json", dump_config(config)
        )

        try:
            proc = await asyncio.create_subprocess_exec(
                self.node,
                str(self._runner()),
                str(config_path),
                "true" if report else "false",
                str(self.project_dir),
                cwd=self.project_dir,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except FileNotFoundError as e:
            raise BackendBuildError(
                entry, output=f"Node.js executable not found: {self.node}"
            ) from e

        stdout, _ = await proc.communicate()
        output = stdout.decode("utf-8", errors="replace")

        if proc.returncode != 0:
            raise BackendBuildError(entry, proc.returncode, output)

        for line in output.splitlines():
            if report:
                logger.info(line)
            else:
                logger.debug(line)


class DryRunBackend:
    """Log what would be bundled without invoking anything."""

    def __init__(self) -> None:
        self.entries: list[str] = []

    async def run(self, config: WebpackConfig, *, report: bool) -> None:
        entry = entry_name(config)
        self.entries.append(entry)
        getAppLogger().info(
            "🧪 (dry-run) Would bundle %s → %s%s",
            entry,
            config["output"]["path"],
            " (with report)" if report else "",
        )
