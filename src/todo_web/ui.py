from __future__ import annotations

import json


def render_homepage(server_url: str) -> str:
    # JSON-encode so the URL is a safe JS string literal, and keep "</" out of the script body.
    server_literal = json.dumps(server_url.rstrip("/")).replace("</", "<\\/")
    return _PAGE.replace("__SERVER_URL__", server_literal)


_PAGE = """
<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>My To-Do List</title>
  <link rel="preconnect" href="https://fonts.googleapis.com">
  <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
  <link
    href="https://fonts.googleapis.com/css2?family=Space+Grotesk:wght@400;500;700&display=swap"
    rel="stylesheet"
  >
  <style>
    :root {
      --bg: #e8eefc;
      --panel: #ffffff;
      --ink: #1f2937;
      --muted: #6b7280;
      --accent: #4f46e5;
      --line: #e5e7eb;
      --ok: #16a34a;
      --info: #2563eb;
      --warn: #d97706;
      --error: #dc2626;
    }
    * { box-sizing: border-box; }
    body {
      margin: 0;
      min-height: 100vh;
      font-family: "Space Grotesk", sans-serif;
      color: var(--ink);
      background: linear-gradient(160deg, #dbeafe 0%, #c7d2fe 100%);
    }
    .wrap {
      max-width: 480px;
      margin: 40px auto;
      padding: 0 16px 24px;
      display: grid;
      gap: 24px;
    }
    .title {
      margin: 0;
      text-align: center;
      font-size: clamp(2rem, 6vw, 3rem);
      color: var(--accent);
    }
    .card {
      background: var(--panel);
      border: 1px solid var(--line);
      border-radius: 14px;
      box-shadow: 0 8px 22px rgba(31, 41, 55, 0.1);
    }
    .adder { display: flex; overflow: hidden; }
    .adder input { flex: 1; border: none; padding: 12px; font-size: 1rem; outline: none; }
    button {
      border: none;
      border-radius: 8px;
      padding: 8px 12px;
      font-family: inherit;
      font-weight: 700;
      cursor: pointer;
    }
    .adder button { border-radius: 0; background: #111827; color: #fff; padding: 0 24px; }
    .list { padding: 18px; }
    ul { list-style: none; margin: 0; padding: 0; display: grid; gap: 10px; }
    li {
      display: flex;
      justify-content: space-between;
      align-items: center;
      gap: 8px;
      background: #f9fafb;
      padding: 10px 12px;
      border-radius: 10px;
    }
    li .text { cursor: pointer; user-select: none; font-size: 1.1rem; }
    li .text.done { text-decoration: line-through; color: #9ca3af; }
    li input { flex: 1; border: 1px solid var(--line); border-radius: 6px; padding: 6px; }
    .actions { display: flex; gap: 6px; }
    .icon { background: none; font-size: 1.1rem; padding: 4px; }
    .edit { color: var(--info); }
    .remove { color: var(--error); }
    .save { background: var(--ok); color: #fff; }
    .cancel { background: #9ca3af; color: #fff; }
    .empty { text-align: center; color: var(--muted); font-style: italic; padding: 18px 0; margin: 0; }
    .toasts {
      position: fixed;
      top: 16px;
      right: 16px;
      display: grid;
      gap: 8px;
      z-index: 10;
    }
    .toast {
      min-width: 220px;
      padding: 10px 14px;
      border-radius: 8px;
      color: #fff;
      cursor: pointer;
      box-shadow: 0 4px 12px rgba(0, 0, 0, 0.15);
    }
    .toast.success { background: var(--ok); }
    .toast.info { background: var(--info); }
    .toast.warning { background: var(--warn); }
    .toast.error { background: var(--error); }
  </style>
</head>
<body>
  <div class="toasts" id="toasts"></div>
  <main class="wrap">
    <h1 class="title">My To-Do List</h1>

    <section class="card adder">
      <input id="draftInput" placeholder="Add a new task...">
      <button id="addBtn">Add</button>
    </section>

    <section class="card list">
      <ul id="todoList"></ul>
      <p class="empty" id="emptyText">No tasks yet. Start by adding one!</p>
    </section>
  </main>

  <script>
    const SERVER_URL = __SERVER_URL__;
    const TOAST_MS = 2000;

    const state = {
      todos: [],
      // Either {kind: "idle"} or {kind: "editing", id, buffer}.
      edit: { kind: "idle" },
    };

    const draftInput = document.getElementById("draftInput");
    const todoList = document.getElementById("todoList");
    const emptyText = document.getElementById("emptyText");
    const toasts = document.getElementById("toasts");

    function notify(level, message) {
      const toast = document.createElement("div");
      toast.className = `toast ${level}`;
      toast.textContent = message;
      toast.addEventListener("click", () => toast.remove());
      toasts.appendChild(toast);
      setTimeout(() => toast.remove(), TOAST_MS);
    }

    async function sendJson(url, method, body) {
      const options = { method, headers: { Accept: "application/json" } };
      if (body !== undefined) {
        options.headers["Content-Type"] = "application/json";
        options.body = JSON.stringify(body);
      }
      const response = await fetch(url, options);
      const data = await response.json().catch(() => ({}));
      if (!response.ok) {
        throw new Error(data.detail || `HTTP ${response.status}`);
      }
      return data;
    }

    function replaceTodo(updated) {
      state.todos = state.todos.map((todo) => (todo.id === updated.id ? updated : todo));
    }

    async function loadTodos() {
      try {
        const data = await sendJson(SERVER_URL, "GET");
        state.todos = Array.isArray(data) ? data : data.todos || [];
      } catch (err) {
        console.error("Error fetching todos:", err);
        notify("error", "Failed to load todos");
      }
      render();
    }

    async function addTodo() {
      const text = draftInput.value;
      if (!text.trim()) {
        notify("warning", "Please enter a task!");
        return;
      }
      try {
        const created = await sendJson(SERVER_URL, "POST", { text });
        state.todos = [...state.todos, created];
        draftInput.value = "";
        notify("success", "Todo added successfully!");
        render();
      } catch (err) {
        console.error("Error adding todo:", err);
        notify("error", "Failed to add todo");
      }
    }

    async function toggleTodo(todo) {
      try {
        const updated = await sendJson(`${SERVER_URL}/${encodeURIComponent(todo.id)}`, "PUT", {
          completed: !todo.completed,
        });
        replaceTodo(updated);
        notify("info", "Todo status updated!");
        render();
      } catch (err) {
        console.error("Error toggling todo:", err);
        notify("error", "Failed to update status");
      }
    }

    async function deleteTodo(todo) {
      try {
        await sendJson(`${SERVER_URL}/${encodeURIComponent(todo.id)}`, "DELETE");
        state.todos = state.todos.filter((item) => item.id !== todo.id);
        notify("success", "Todo deleted!");
        render();
      } catch (err) {
        console.error("Error deleting todo:", err);
        notify("error", "Failed to delete todo");
      }
    }

    function startEdit(todo) {
      state.edit = { kind: "editing", id: todo.id, buffer: todo.text };
      render();
    }

    function cancelEdit() {
      state.edit = { kind: "idle" };
      render();
    }

    async function saveEdit() {
      const edit = state.edit;
      if (edit.kind !== "editing") {
        return;
      }
      if (!edit.buffer.trim()) {
        notify("warning", "Please enter text before saving!");
        return;
      }
      try {
        const updated = await sendJson(`${SERVER_URL}/${encodeURIComponent(edit.id)}`, "PUT", {
          text: edit.buffer,
        });
        replaceTodo(updated);
        state.edit = { kind: "idle" };
        notify("success", "Todo updated successfully!");
        render();
      } catch (err) {
        console.error("Error editing todo:", err);
        notify("error", "Failed to update todo");
      }
    }

    function button(label, className, onClick, title) {
      const el = document.createElement("button");
      el.className = className;
      el.textContent = label;
      if (title) {
        el.title = title;
      }
      el.addEventListener("click", onClick);
      return el;
    }

    function renderEditing(li, edit) {
      const input = document.createElement("input");
      input.value = edit.buffer;
      input.addEventListener("input", (event) => {
        edit.buffer = event.target.value;
      });
      const actions = document.createElement("div");
      actions.className = "actions";
      actions.append(button("Save", "save", saveEdit), button("Cancel", "cancel", cancelEdit));
      li.append(input, actions);
    }

    function renderIdle(li, todo) {
      const text = document.createElement("span");
      text.className = todo.completed ? "text done" : "text";
      text.textContent = todo.text;
      text.addEventListener("click", () => toggleTodo(todo));
      const actions = document.createElement("div");
      actions.className = "actions";
      actions.append(
        button("\\u270E", "icon edit", () => startEdit(todo), "Edit"),
        button("\\u2715", "icon remove", () => deleteTodo(todo), "Delete"),
      );
      li.append(text, actions);
    }

    function render() {
      todoList.replaceChildren();
      for (const todo of state.todos) {
        const li = document.createElement("li");
        if (state.edit.kind === "editing" && state.edit.id === todo.id) {
          renderEditing(li, state.edit);
        } else {
          renderIdle(li, todo);
        }
        todoList.appendChild(li);
      }
      emptyText.hidden = state.todos.length > 0;
    }

    document.getElementById("addBtn").addEventListener("click", addTodo);
    draftInput.addEventListener("keydown", (event) => {
      if (event.key === "Enter") {
        addTodo();
      }
    });

    loadTodos();
  </script>
</body>
</html>
"""
