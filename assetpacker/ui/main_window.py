import os

from PySide6.QtCore import Qt, QObject, QThread, Signal
from PySide6.QtWidgets import (
    QMainWindow,
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QFileDialog,
    QListWidget,
    QListWidgetItem,
    QPlainTextEdit,
    QSplitter,
    QProgressBar,
    QCheckBox
)

from assetpacker.config import APP_NAME, APP_VERSION, IMAGE_SUFFIX
from assetpacker.core.pipeline import run_pack
from assetpacker.core.validator import strip_trailing_sep, validate_pack_inputs
from assetpacker.errors import PackError, ValidationError
from assetpacker.models import PackRequest


class PackWorker(QObject):
    progress = Signal(int, str)        # index, relpath
    finished = Signal(object)          # PackResult
    failed = Signal(object)            # PackError

    def __init__(self, request, editor_lookup=None):
        super().__init__()
        self.request = request
        self.editor_lookup = editor_lookup

    def run(self):
        def _progress(i, item):
            self.progress.emit(i, item.relpath)

        # The editor blocks this thread only; the window stays responsive.
        try:
            result = run_pack(self.request, editor_lookup=self.editor_lookup, progress_cb=_progress)
        except PackError as e:
            self.failed.emit(e)
            return
        self.finished.emit(result)


class MainWindow(QMainWindow):
    def __init__(self, editor_lookup=None):
        super().__init__()
        self.setWindowTitle(f"{APP_NAME} (v{APP_VERSION})")
        self.setMinimumSize(900, 600)

        # State
        self._editor_lookup = editor_lookup
        self._last_planned = []
        self._last_result = None
        self._pack_thread = None
        self._pack_worker = None

        # --- Root widget
        root = QWidget()
        self.setCentralWidget(root)

        main_layout = QVBoxLayout(root)
        main_layout.setContentsMargins(12, 12, 12, 12)
        main_layout.setSpacing(10)

        # -------------------------
        # Top: Source / Output rows
        # -------------------------
        self.source_edit = QLineEdit()
        self.source_edit.setPlaceholderText(f"Select folder with {IMAGE_SUFFIX} files...")

        btn_source = QPushButton("Browse...")
        btn_source.clicked.connect(self.pick_source_folder)

        source_row = QHBoxLayout()
        source_row.addWidget(QLabel("Source:"))
        source_row.addWidget(self.source_edit, 1)
        source_row.addWidget(btn_source)

        self.output_edit = QLineEdit()
        self.output_edit.setPlaceholderText("Select output root (pack folder and zip go here)...")

        btn_output = QPushButton("Browse...")
        btn_output.clicked.connect(self.pick_output_folder)

        output_row = QHBoxLayout()
        output_row.addWidget(QLabel("Output:"))
        output_row.addWidget(self.output_edit, 1)
        output_row.addWidget(btn_output)

        main_layout.addLayout(source_row)
        main_layout.addLayout(output_row)

        # -------------------------
        # Pack name / Version
        # -------------------------
        pack_row = QHBoxLayout()

        self.name_edit = QLineEdit()
        self.name_edit.setPlaceholderText("Pack name (e.g. rpg_asset_pack)")

        self.version_edit = QLineEdit()
        self.version_edit.setPlaceholderText("1.0")
        self.version_edit.setText("1.0")
        self.version_edit.setMaximumWidth(120)

        pack_row.addWidget(QLabel("Pack name:"))
        pack_row.addWidget(self.name_edit, 1)
        pack_row.addWidget(QLabel("Version:"))
        pack_row.addWidget(self.version_edit)

        main_layout.addLayout(pack_row)

        # -------------------------
        # Mid: Dry run + buttons
        # -------------------------
        mid_row = QHBoxLayout()

        self.cb_dry_run = QCheckBox("Dry run (report only)")
        mid_row.addWidget(self.cb_dry_run)
        mid_row.addStretch(1)

        self.btn_preview = QPushButton("Preview")
        self.btn_preview.clicked.connect(self.on_preview_clicked)

        self.btn_package = QPushButton("Package")
        self.btn_package.clicked.connect(self.on_package_clicked)

        mid_row.addWidget(self.btn_preview)
        mid_row.addWidget(self.btn_package)

        main_layout.addLayout(mid_row)

        # -------------------------
        # Progress
        # -------------------------
        prog_row = QHBoxLayout()

        self.progress = QProgressBar()
        self.progress.setRange(0, 100)
        self.progress.setValue(0)

        prog_row.addWidget(QLabel("Progress:"))
        prog_row.addWidget(self.progress, 1)

        main_layout.addLayout(prog_row)

        # -------------------------
        # Bottom: Results + Logs
        # -------------------------
        splitter = QSplitter(Qt.Horizontal)

        results_panel = QWidget()
        results_layout = QVBoxLayout(results_panel)
        results_layout.setContentsMargins(0, 0, 0, 0)

        results_layout.addWidget(QLabel("Results"))
        self.results_list = QListWidget()
        results_layout.addWidget(self.results_list, 1)

        logs_panel = QWidget()
        logs_layout = QVBoxLayout(logs_panel)
        logs_layout.setContentsMargins(0, 0, 0, 0)

        logs_layout.addWidget(QLabel("Log"))
        self.log_box = QPlainTextEdit()
        self.log_box.setReadOnly(True)
        self.log_box.setPlaceholderText("Logs will appear here...")
        logs_layout.addWidget(self.log_box, 1)

        splitter.addWidget(results_panel)
        splitter.addWidget(logs_panel)
        splitter.setSizes([540, 360])

        main_layout.addWidget(splitter, 1)

        self.log("Ready. Choose folders, then Preview / Package.")

        # Stable IDs for UI tests
        self.source_edit.setObjectName("source_edit")
        self.output_edit.setObjectName("output_edit")
        self.name_edit.setObjectName("name_edit")
        self.version_edit.setObjectName("version_edit")
        self.cb_dry_run.setObjectName("cb_dry_run")
        self.btn_preview.setObjectName("btn_preview")
        self.btn_package.setObjectName("btn_package")
        self.results_list.setObjectName("results_list")
        self.log_box.setObjectName("log_box")
        self.progress.setObjectName("progress")

    # -------------------------
    # UI Helpers
    # -------------------------
    def log(self, msg: str):
        self.log_box.appendPlainText(msg)

    def add_result(self, level: str, message: str):
        text = f"[{level}] {message}"
        item = QListWidgetItem(text)

        lvl = level.upper().strip()
        if lvl == "ERROR":
            item.setForeground(Qt.red)
        elif lvl == "WARNING":
            item.setForeground(Qt.darkYellow)
        else:
            item.setForeground(Qt.darkGreen)

        self.results_list.addItem(item)

    def pick_source_folder(self):
        folder = QFileDialog.getExistingDirectory(self, "Select Source Folder")
        if folder:
            self.source_edit.setText(os.path.normpath(folder))
            self.log(f"Source folder set: {folder}")

    def pick_output_folder(self):
        folder = QFileDialog.getExistingDirectory(self, "Select Output Folder")
        if folder:
            self.output_edit.setText(os.path.normpath(folder))
            self.log(f"Output folder set: {folder}")

    def _set_busy(self, busy: bool):
        self.btn_preview.setEnabled(not busy)
        self.btn_package.setEnabled(not busy)

    def _show_error(self, e: PackError):
        if isinstance(e, ValidationError):
            for r in e.results:
                self.add_result(r.level, f"{r.code}: {r.message}")
        else:
            self.add_result("ERROR", f"{type(e).__name__}: {e}")
        self.log(f"ERROR: {e}")

    def _read_request(self, dry_run: bool):
        """Build a PackRequest from the form, or list the problems and return None."""
        source = self.source_edit.text().strip()
        output = self.output_edit.text().strip()
        name = self.name_edit.text().strip()
        version = self.version_edit.text().strip()

        issues = validate_pack_inputs(source, output, name, version)
        if issues:
            for i in issues:
                self.add_result(i.level, f"{i.code}: {i.message}")
            return None

        return PackRequest(
            source_dir=source,
            output_root=strip_trailing_sep(output),
            pack_name=strip_trailing_sep(name),
            version=version,
            dry_run=dry_run,
        )

    # -------------------------
    # Preview (dry run)
    # -------------------------
    def on_preview_clicked(self):
        self.results_list.clear()
        self._last_planned = []

        request = self._read_request(dry_run=True)
        if request is None:
            self.log("---- PREVIEW BLOCKED ----")
            return

        self.log("---- PREVIEW START ----")
        self.log(f"Pack: {request.pack_name} | Version: {request.version}")

        try:
            result = run_pack(request, editor_lookup=self._editor_lookup)
        except PackError as e:
            self._show_error(e)
            self.log("---- PREVIEW BLOCKED ----")
            return

        copies = [line for line in result.planned if line.startswith("would copy")]
        self.add_result("INFO", f"Plan ready: {len(copies)} file(s) will be copied.")
        for line in result.planned:
            self.add_result("INFO", line)

        self._last_planned = result.planned
        self.log(f"Preview plan contains {len(copies)} copy action(s).")
        self.log("---- PREVIEW DONE ----")

    # -------------------------
    # Package
    # -------------------------
    def on_package_clicked(self):
        if self.cb_dry_run.isChecked():
            self.on_preview_clicked()
            return

        self.results_list.clear()
        request = self._read_request(dry_run=False)
        if request is None:
            return

        self.progress.setRange(0, 0)  # busy: the scan is lazy, so the total is unknown
        self._set_busy(True)

        self.log("---- PACKAGING START ----")
        self.add_result("INFO", "Packaging... the README opens in your editor; close it to continue.")

        self._pack_thread = QThread()
        self._pack_worker = PackWorker(request, editor_lookup=self._editor_lookup)
        self._pack_worker.moveToThread(self._pack_thread)

        self._pack_thread.started.connect(self._pack_worker.run)
        self._pack_worker.progress.connect(self._on_pack_progress)
        self._pack_worker.finished.connect(self._on_pack_finished)
        self._pack_worker.failed.connect(self._on_pack_failed)

        for sig in (self._pack_worker.finished, self._pack_worker.failed):
            sig.connect(self._pack_thread.quit)
            sig.connect(self._pack_worker.deleteLater)
        self._pack_thread.finished.connect(self._pack_thread.deleteLater)

        self._pack_thread.start()

    def _on_pack_progress(self, current: int, relpath: str):
        # Keep log readable
        if current == 1 or current % 10 == 0:
            self.log(f"{current}  {relpath}")

    def _finish_run(self):
        self._set_busy(False)
        self.progress.setRange(0, 100)

    def _on_pack_finished(self, result):
        self._finish_run()
        self.progress.setValue(100)
        self._last_result = result

        self.add_result("INFO", f"Pack done: copied={result.summary.copied}")
        self.add_result("INFO", f"Pack folder: {result.target}")
        self.add_result("INFO", f"Archive: {result.archive}")
        self.log("---- PACKAGING DONE ----")

    def _on_pack_failed(self, error):
        self._finish_run()
        self.progress.setValue(0)
        self._show_error(error)
        self.log("---- PACKAGING FAILED ----")

